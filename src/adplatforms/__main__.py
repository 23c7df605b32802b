from adplatforms.cli import main

raise SystemExit(main())
