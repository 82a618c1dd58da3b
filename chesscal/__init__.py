"""Chessboard quad handling, splines, quaternions, fisheye projection and geometry helpers for camera calibration."""

__version__ = "0.1.0"