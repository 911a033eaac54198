"""Import dotfiles from a home directory into a managed dotfiles repository."""

__version__ = "0.1.0"
