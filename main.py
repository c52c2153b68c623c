#!/usr/bin/env python3
"""QuizTick — entry point.

Run with:
    python main.py act_math 40
    python -m quiztick act_math 40
"""

import sys

from quiztick.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
