import sys

from cli.play import main

sys.exit(main())
