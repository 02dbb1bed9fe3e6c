import sys

from shareverify.cli import main

sys.exit(main())
