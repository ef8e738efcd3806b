import sys

from service_actions.cli import main

sys.exit(main())
