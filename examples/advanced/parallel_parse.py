"""Thread-safe: render 1000 docs in parallel, one parser per call."""

from concurrent.futures import ThreadPoolExecutor

from ganchos import Markdown

md = Markdown(extensions="all")
docs = ["# Doc " + str(i) + "\n\nContent for *document* " + str(i) for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(md, docs))

print(f"Rendered {len(results)} documents in parallel")
print("First doc:", results[0].splitlines()[0])
print("Last doc:", results[-1].splitlines()[0])
