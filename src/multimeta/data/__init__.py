"""Study result containers and file I/O."""
