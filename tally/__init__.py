"""Table Tally — score and character tracking for tabletop game sessions."""
