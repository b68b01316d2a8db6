"""Domain logic: names, metric families and formats."""
