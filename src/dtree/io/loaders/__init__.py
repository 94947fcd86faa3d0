from .errors import LoaderError
from .tree_loader import dump_tree, load_tree, load_tree_directory, load_tree_from_dict

__all__ = ["LoaderError", "dump_tree", "load_tree", "load_tree_directory", "load_tree_from_dict"]
