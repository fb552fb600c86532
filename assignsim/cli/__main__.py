from assignsim.cli.main import main

main()
