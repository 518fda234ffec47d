"""Thread safe: parse 1000 posts in parallel with one shared parser."""

from concurrent.futures import ThreadPoolExecutor

from ubbparse import ParseConfig, UbbParser

parser = UbbParser(config=ParseConfig(math_enabled=False))
posts = [f"[b]Post {i}[/b] costs ${i} [ac0{i % 10}]" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(parser.parse, posts))

print(f"Parsed {len(results)} posts in parallel")
print("First post children:", len(results[0].children))
print("Last post children:", len(results[-1].children))
