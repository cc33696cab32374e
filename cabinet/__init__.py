"""Cabinet: a path-addressed file, directory and boilerplate store served over HTTP."""
