"""Projects: storage, interactive operations and cascade deletion."""
