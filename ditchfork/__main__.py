import sys

from ditchfork.cli import main

sys.exit(main())
