from scrollkit.cli import main

raise SystemExit(main())
