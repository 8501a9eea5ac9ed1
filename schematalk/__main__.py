import sys

from schematalk.main import main

sys.exit(main())
