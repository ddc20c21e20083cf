from deploy_info.cli.app import main

main()
