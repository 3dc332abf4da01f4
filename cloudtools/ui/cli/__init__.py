"""CLI subgroups registered on the ``cloudtools`` entry point."""
