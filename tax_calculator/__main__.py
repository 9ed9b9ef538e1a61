import sys

from tax_calculator.cli import main

sys.exit(main())
