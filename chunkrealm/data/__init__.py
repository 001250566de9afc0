"""File loading: world layout, chunk maps, monster templates."""
