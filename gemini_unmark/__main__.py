import sys

from .remover import main

sys.exit(main())
