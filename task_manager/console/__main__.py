import sys

from task_manager.console.cli import main

sys.exit(main())
