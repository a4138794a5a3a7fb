from legacy_rewriter.cli.app import main

main()
