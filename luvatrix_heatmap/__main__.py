from luvatrix_heatmap.cli import main

raise SystemExit(main())
