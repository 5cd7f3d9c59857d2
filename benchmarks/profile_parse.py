"""cProfile wrapper for Ganchos rendering.

Run with:
    python -m cProfile -o profile.prof benchmarks/profile_parse.py
    python -m snakeviz profile.prof

Or for direct profiling:
    python benchmarks/profile_parse.py
"""

from __future__ import annotations

import cProfile
import io
import pstats
import sys
import time


def build_corpus(sections: int = 100) -> str:
    """Generate a large markdown document (~60KB) using every construct."""
    parts = []
    for i in range(sections):
        parts.append(f"""
# Section {i}

This is paragraph {i} with **bold**, *italic*, ~~gone~~ and `code`.
A [link](http://example.com/{i} "title {i}") and an ![image](/img/{i}.png),
plus a bare http://example.com/bare/{i}. and an [ref link][r{i}].

- List item 1
- List item 2
    continued
- List item 3
  - nested

1. one
2. two

> Quoted *text* {i}
> > nested quote

```python
def function_{i}():
    return {i}
```

    indented code {i}

Score | Grade
:-----|------:
{i}   | A

<div>
raw html {i}
</div>

[r{i}]: http://example.com/ref/{i}
""")
    return "".join(parts)


def render_corpus(iterations: int = 10) -> None:
    """Render the corpus multiple times with every extension on."""
    from ganchos import Markdown

    md = Markdown(extensions="all")
    doc = build_corpus()

    for _ in range(iterations):
        md(doc)


def time_pathological(sizes: tuple[int, ...] = (1000, 2000, 4000)) -> None:
    """Time inputs whose openers never close.

    Each opener rescans to the end of the paragraph, so doubling the size
    roughly quadruples the time.
    """
    from ganchos import markdown

    cases = {
        "unclosed emphasis": "*a ",
        "unclosed brackets": "[",
    }
    for name, unit in cases.items():
        for n in sizes:
            doc = unit * n
            start = time.perf_counter()
            markdown(doc)
            elapsed = time.perf_counter() - start
            print(f"{name:>18} x{n:<6} {elapsed * 1000:8.1f}ms")


def main() -> None:
    """Run profiling and print results."""
    print("Ganchos Profiling")
    print("=" * 60)
    print(f"Python {sys.version.split()[0]}")

    iterations = 10
    print(f"\nRendering synthetic corpus {iterations}x...")

    profiler = cProfile.Profile()
    start = time.perf_counter()
    profiler.enable()

    render_corpus(iterations)

    profiler.disable()
    elapsed = time.perf_counter() - start
    print(f"Total: {elapsed:.3f}s ({elapsed / iterations * 1000:.1f}ms per render)")

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY CUMULATIVE TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.CUMULATIVE)
    ps.print_stats(30)
    print(s.getvalue())

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY TOTAL (SELF) TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.TIME)
    ps.print_stats(30)
    print(s.getvalue())

    print("\n" + "=" * 60)
    print("PATHOLOGICAL INPUTS")
    print("=" * 60 + "\n")
    time_pathological()


if __name__ == "__main__":
    main()
