"""coin-spine command-line interface (``coin-spine``)."""
