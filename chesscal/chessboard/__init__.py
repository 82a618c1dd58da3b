"""Chessboard quads: neighbour linking, row/column labelling, corner ordering and plausibility checks."""