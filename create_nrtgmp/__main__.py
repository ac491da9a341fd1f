from create_nrtgmp.orchestrator import main

main()
