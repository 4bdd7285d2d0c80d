from tinywiki.cli import main

raise SystemExit(main())
