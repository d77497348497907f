"""
Core package aggregator for blaze contracts (wire models, codec, query builder, grammar).

## Contracts (single source of truth)
- Wire — pydantic models for values, documents, and response envelopes.
- Native — explicit tags for bytes/reference/geo-point/timestamp values and the NAN marker.
- Codec — total encode/decode between native Python values and wire values.
- Query — structured query models and the immutable `Query` builder.
- Grammar — builder and wire operator/direction names with normalization helpers.
- Serde — camelCase request bodies and canonical JSON.

## Notes
- Zero‑IO policy: stdlib + pydantic only; no network, file, or logging side effects.
- Naming policy: Python attributes are lower_snake; serialized names are camelCase.
- Decode is deliberately asymmetric: extended variants come back raw, never re-tagged.

## Downstream usage
- blaze.api — encodes request bodies with `codec.encode`, serializes queries with
  `serde.to_body`, and normalizes responses with `codec.decode`.

## Examples
```python
from blaze.core.codec import decode, encode
from blaze.core.native import timestamp
from blaze.core.query import from_

doc = encode({"author": "Donald Knuth", "published": timestamp(1_000_000_000)})
decode(doc)  # {'author': 'Donald Knuth', 'published': {'seconds': 1000000000, 'nanos': 0}}

query = from_("books").where({"author": "Donald Knuth", "year": ("gte", 1968)}).limit(10)
query.to_body()["limit"]  # 10
```
"""
