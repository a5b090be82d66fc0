from tweet_batch.errors import DecodeError, ParseError, describe


def test_describe_renders_causal_chain() -> None:
    try:
        try:
            try:
                raise ValueError("bad month")
            except ValueError as exc:
                raise ParseError("cannot parse created_datetime") from exc
        except ParseError as exc:
            raise DecodeError("feed item 3: cannot parse created_datetime") from exc
    except DecodeError as exc:
        rendered = describe(exc)

    assert rendered == (
        "feed item 3: cannot parse created_datetime "
        "[DecodeError <- ParseError <- ValueError]"
    )
