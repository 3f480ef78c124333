"""Import pipeline services: discovery, selection, normalization and loading."""
