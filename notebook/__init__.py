"""Restaurant Notebook: shared restaurant lists, visits and notes."""
