import sys

from lodging_importer.cli import main

sys.exit(main())
