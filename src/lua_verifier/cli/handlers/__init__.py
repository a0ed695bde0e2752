from .tree import handle_dump_tree
from .verify import handle_verify
