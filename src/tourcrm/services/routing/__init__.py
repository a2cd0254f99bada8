"""Tour routing: nearest-neighbour ordering and tour planning."""
