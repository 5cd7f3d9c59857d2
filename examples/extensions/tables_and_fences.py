"""Tables, fenced code, strikethrough: enable what you need by name."""

from ganchos import Markdown

md = Markdown(extensions=["tables", "fenced_code", "strikethrough", "autolink"])

source = """
Score | Grade
:-----|:----:
94    | A
85    | B

```python
print("fenced")
```

~~old~~ new, see http://example.com.
"""

html = md(source)
print(html[:600] + "..." if len(html) > 600 else html)
