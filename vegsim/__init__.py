"""Tree growth simulation driven by light, resources and pruning rules."""

__version__ = "0.1.0"

__all__ = [
    "boundingvolume",
    "branchdata",
    "controller",
    "environment",
    "markerset",
    "metamer",
    "parameters",
    "plant",
    "plantgenetics",
    "pruning",
    "resourcedistributor",
    "rng",
    "shadowvoxelset",
    "spalier",
    "treeapp",
    "treeparameter",
    "vector",
]