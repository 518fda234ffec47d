"""Cache a parsed post as JSON and restore it."""

from ubbparse import from_json, parse, to_json, to_ubb

source = "[color=red]Hot[/color] take: $e^{i\\pi}+1=0$"
doc = parse(source)

payload = to_json(doc, indent=2)
print(payload)

restored = from_json(payload)
assert to_ubb(restored) == source
print("Round trip OK")
