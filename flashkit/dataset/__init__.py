"""Composable datasets whose samples are lists of arrays, and index partitioning."""