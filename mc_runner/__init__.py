"""mc-runner -- launcher for a Java game server.

Finds a Java runtime, picks the server jar in the working directory
(remembering the choice), and runs it with fixed G1 tuning flags.

Entry point: python launch.py  (or the `mc-runner` console script)
"""

__version__ = "0.1.0"
