"""Benchmark tagreader against the standard library's html.parser.

Both walk the whole document and visit every node; neither builds a tree.

Run with:
    pytest benchmarks/benchmark_vs_htmlparser.py -v --benchmark-only

Or for quick comparison:
    python benchmarks/benchmark_vs_htmlparser.py
"""

import time
from html.parser import HTMLParser

from conftest import make_large_document


class _CountingParser(HTMLParser):
    """HTMLParser that only counts callbacks."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.count = 0

    def handle_starttag(self, tag, attrs):
        self.count += 1

    def handle_endtag(self, tag):
        self.count += 1

    def handle_data(self, data):
        self.count += 1

    def handle_comment(self, data):
        self.count += 1

    def handle_decl(self, decl):
        self.count += 1


def walk_tagreader(doc: str) -> int:
    """Visit every node with TagReader."""
    from tagreader import TagReader

    reader = TagReader(doc)
    count = 0
    for _ in reader:
        count += 1
    return count


def walk_htmlparser(doc: str) -> int:
    """Visit every node with html.parser."""
    parser = _CountingParser()
    parser.feed(doc)
    parser.close()
    return parser.count


def extract_links_tagreader(doc: str) -> list[str]:
    """Search-driven access: jump from link to link."""
    from tagreader import TagReader

    reader = TagReader(doc)
    links = []
    while reader.skip_to_tag_inc("a", "href", is_optional=True):
        links.append(reader.get_attr("href"))
    return links


def time_it(func, doc: str, iterations: int = 10) -> float:
    """Average seconds per call after one warmup call."""
    func(doc)
    start = time.perf_counter()
    for _ in range(iterations):
        func(doc)
    return (time.perf_counter() - start) / iterations


def main() -> None:
    """Run benchmarks and print results."""
    import sys

    doc = make_large_document()
    print(f"Document: {len(doc) / 1024:.0f}KB")
    print(f"Python {sys.version.split()[0]}\n")

    results = [
        ("tagreader (walk)", time_it(walk_tagreader, doc)),
        ("tagreader (links)", time_it(extract_links_tagreader, doc)),
        ("html.parser (walk)", time_it(walk_htmlparser, doc)),
    ]

    print("=" * 60)
    print("RESULTS: single thread")
    print("=" * 60)
    baseline = min(t for _, t in results)
    for name, elapsed in sorted(results, key=lambda x: x[1]):
        ratio = elapsed / baseline if baseline > 0 else 0
        print(f"{name:20} {elapsed * 1000:8.2f}ms  ({ratio:.2f}x)")


# pytest-benchmark integration
try:
    import pytest

    @pytest.mark.benchmark(group="walk-large-doc")
    def test_benchmark_tagreader_walk(benchmark, large_document):
        """Benchmark a full TagReader traversal."""
        count = benchmark(walk_tagreader, large_document)
        assert count > 0

    @pytest.mark.benchmark(group="walk-large-doc")
    def test_benchmark_htmlparser_walk(benchmark, large_document):
        """Benchmark a full html.parser traversal."""
        count = benchmark(walk_htmlparser, large_document)
        assert count > 0

    @pytest.mark.benchmark(group="search-large-doc")
    def test_benchmark_tagreader_links(benchmark, large_document):
        """Benchmark skip_to_tag_inc jumping between links."""
        links = benchmark(extract_links_tagreader, large_document)
        assert len(links) == 2000

    @pytest.mark.benchmark(group="snippets")
    def test_benchmark_tagreader_snippets(benchmark, real_world_snippets):
        """Benchmark many small, partly ill-formed documents."""

        def walk_all():
            for doc in real_world_snippets:
                walk_tagreader(doc)

        benchmark(walk_all)

except ImportError:
    pass


if __name__ == "__main__":
    main()
