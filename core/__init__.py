"""Domain core: sessions, chat exchange, registry, ledger, config."""
