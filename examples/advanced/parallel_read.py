"""Readers share nothing: read 1000 docs in parallel, one reader per doc."""

from concurrent.futures import ThreadPoolExecutor

from tagreader import ReaderConfig, TagReader

config = ReaderConfig(force_lower_case=True)
docs = [f"<h1>Doc {i}</h1><p>Content for document {i}</p>" for i in range(1000)]


def headline(doc: str) -> str:
    reader = TagReader(doc, config=config)
    reader.skip_to_tag_inc("h1")
    return reader.read_text_until_tag("/h1")


with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(headline, docs))

print(f"Read {len(results)} documents in parallel")
print("First:", results[0])
print("Last:", results[-1])
