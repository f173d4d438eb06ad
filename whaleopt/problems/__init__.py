"""Problems package for instances of scheduling problems."""

from whaleopt.problems.jssp import JSSPInstance
