"""Half-star review submission: rating control, review stores and the board that ties them."""

__version__ = "0.1.0"
