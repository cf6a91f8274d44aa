"""
Helpers to build directory trees for tests.
"""
import pathlib as pl
from typing import Dict, Union

TreeLayout = Dict[str, Union[str, bytes, dict]]


def make_tree(root: pl.Path, layout: TreeLayout) -> pl.Path:
    """
    Creates files and directories below `root`. String and bytes values become files with that
    content, dict values become directories.

    :param root: Existing directory.
    :param layout: Tree description.
    :return: The root directory.
    """
    for name, content in layout.items():
        path = root / name
        if isinstance(content, dict):
            path.mkdir()
            make_tree(path, content)
        elif isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding='utf8')
    return root
