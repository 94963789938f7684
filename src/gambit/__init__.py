"""gambit — an opening trainer built on a small, dependency-free chess core.

The computer plays a line from an opening corpus, the trainee answers, and
every answer is checked against the corpus until the move budget is reached.
"""

__version__ = "0.1.0"
