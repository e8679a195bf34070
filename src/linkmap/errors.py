"""Errors surfaced by linkmap."""


class LoadError(Exception):
    """A document could not be retrieved, parsed, or resolved.

    Terminal for one load attempt. The viewer keeps its previous state.
    """
