"""Walk a document node by node and print what the cursor sees."""

from tagreader import TagReader

reader = TagReader('<!DOCTYPE html><p class="intro">Hi <b>there</b></p><!-- done -->')

for _ in reader:
    if reader.tag_name:
        kind = "close" if reader.is_closing_tag else "open"
        print(f"{reader.tag_pos:3} {kind:5} {reader.tag_name} {reader.attr_names}")
    elif reader.plain_text is not None:
        print(f"{reader.tag_pos:3} text  {reader.plain_text!r}")
    elif reader.comment is not None:
        print(f"{reader.tag_pos:3} note  {reader.comment!r}")
    else:
        print(f"{reader.tag_pos:3} misc  {reader.misc_text!r}")
