import sys

from godot_ci.cli import main


sys.exit(main())
