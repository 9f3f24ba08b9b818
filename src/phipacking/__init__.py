"""Phi Sphere Packing Lab: place golden-ratio spheres and snap them into contact."""
