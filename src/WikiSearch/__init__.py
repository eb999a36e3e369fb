"""WikiSearch: wiki search syntax on top of a Sphinx/Manticore index server."""
