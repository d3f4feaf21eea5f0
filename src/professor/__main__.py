from professor.api.app import main

main()
