"""
tokenbasic - randomiser.py
Random number generator

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import random


class Randomiser(object):
    """Process-wide pseudo-random generator used by RND."""

    def __init__(self, seed=None):
        """Initialise the random number generator."""
        self._random = random.Random()
        self.reseed(seed)

    def reseed(self, seed=None):
        """Reseed the generator; None seeds from system entropy."""
        self._random.seed(seed)

    def randint_below(self, upper):
        """Uniform integer in [0, upper)."""
        return self._random.randrange(upper)


# seeded once at startup; tests and the command line reseed through seed()
RANDOMISER = Randomiser()

def seed(value=None):
    """Reseed the process-wide generator."""
    RANDOMISER.reseed(value)
