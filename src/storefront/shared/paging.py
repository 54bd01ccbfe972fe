"""Read a whole query result, one provider page at a time.

Protean queries return at most ``limit`` rows (100 by default), so listings
that must be complete walk the offsets until a short page comes back.
"""

PAGE_SIZE = 100


def fetch_all(query, page_size=PAGE_SIZE):
    records = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all().items
        records.extend(page)
        if len(page) < page_size:
            return records
        offset += page_size
