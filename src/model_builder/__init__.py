"""SQL Model Builder command line tool."""
