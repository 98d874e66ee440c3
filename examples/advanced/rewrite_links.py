"""Copy a document while rewriting tags, and collect inline assets.

Every external link gets rel="noopener" and target="_blank"; inline SVG
images are moved out to attachments and referenced by path.
"""

import io

from tagreader import TagReader

html = """<html><body>
<a href="https://example.com">out</a> <a href="/local">in</a>
<img src="data:image/svg+xml,<svg/>" alt=logo>
</body></html>"""

reader = TagReader(html)
reader.mask_line_breaks = False
out = io.StringIO()

for _ in reader:
    if reader.tag_name == "a" and not reader.is_closing_tag:
        if reader.get_attr("href").startswith("http"):
            reader.set_attr("rel", "noopener").set_attr("target", "_blank")
    elif reader.tag_name == "img" and reader.get_attr("src").startswith("data:image/svg+xml,"):
        svg = reader.get_attr("src").split(",", 1)[1]
        path = reader.register_compound_attc(f"img/{reader.tag_pos}.svg", svg)
        reader.set_attr("src", path)
    reader.export_tag(out)

print(out.getvalue())

bundle = io.StringIO()
reader.export_compound_attc(bundle)
print(bundle.getvalue())
