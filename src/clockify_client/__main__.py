from clockify_client.cli import main

main()
