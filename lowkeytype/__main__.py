import sys

from lowkeytype.cli import main

sys.exit(main())
