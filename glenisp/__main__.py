import sys

from glenisp.repl import main

sys.exit(main())
