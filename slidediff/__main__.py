# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import sys

from .slidediffapp import main


if __name__ == "__main__":
    # This is triggered by "python -m slidediff <args>"
    sys.exit(main())
