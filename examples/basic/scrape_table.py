"""Pull rows out of an HTML table with searches and read_date."""

from tagreader import TagReader

html = """
<table id="prices">
  <tr class="row"><td>01.02.2024</td><td>Widget &amp; Co</td><td>12.50</td></tr>
  <tr class="row"><td>March 3, 2024</td><td>Gadget</td><td>7.00</td></tr>
  <tr class="total"><td colspan=2>Total</td><td>19.50</td></tr>
</table>
"""

reader = TagReader(html)
reader.skip_to_tag("table", "id=prices")

while reader.skip_to_tag_inc("tr", "class=row", is_optional=True):
    reader.skip_to_tag_inc("td")
    when = reader.read_date()
    reader.skip_to_tag_inc("td")
    name = reader.read_text_until_tag("/td")
    reader.skip_to_tag_inc("td")
    price = reader.read_text_until_tag("/td")
    print(when.isoformat(), name, price)
