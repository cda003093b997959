from upload_relay.server import main

main()
