"""Dubins and Reeds-Shepp word solvers on normalised goals."""
