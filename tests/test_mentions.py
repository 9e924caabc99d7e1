"""@mention extraction, active token detection and in-place completion."""

from fitplan.services.mentions import active_mention_query, extract_mentions, insert_mention


def test_extract_keeps_order_and_dedupes_case_insensitively():
    assert extract_mentions("hey @alice and @bob, also @Alice!") == ["alice", "bob"]


def test_extract_ignores_bare_at():
    assert extract_mentions("email me @ home") == []


def test_active_query_only_for_unterminated_token():
    assert active_mention_query("nice work @Al") == "al"
    assert active_mention_query("nice work @") == ""
    assert active_mention_query("nice work @al ") is None
    assert active_mention_query("no mention here") is None


def test_active_query_respects_cursor():
    text = "@bo great job @al"
    assert active_mention_query(text, cursor=3) == "bo"
    assert active_mention_query(text, cursor=len(text)) == "al"


def test_insert_replaces_token_at_cursor_only():
    text = "@al says hi to @al"
    new_text, cursor = insert_mention(text, 3, "alice")
    assert new_text == "@alice  says hi to @al"
    assert cursor == len("@alice ")


def test_insert_at_end():
    new_text, cursor = insert_mention("great @bo", None, "bob")
    assert new_text == "great @bob "
    assert cursor == len(new_text)


def test_insert_after_finished_mention_keeps_earlier_text():
    text = "hi @bob how are you"
    new_text, cursor = insert_mention(text, len(text), "alice")
    assert new_text == "hi @bob how are you@alice "
    assert cursor == len(new_text)
    assert active_mention_query(text) is None
