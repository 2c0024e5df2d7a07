from depinfo_core.cli import main

raise SystemExit(main())
