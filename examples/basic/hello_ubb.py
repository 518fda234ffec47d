"""Parse a forum post and look at its tree: zero config, zero deps."""

from ubbparse import parse

doc = parse("[quote=Ann]Hello [b]World[/b] [ac01][/quote]")
for node in doc.walk():
    print("  " * node.depth + node.kind.name)
