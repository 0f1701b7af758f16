from studyviewtoolbox.studyview.values import parse_number


def test_parses_plain_numbers():
    assert parse_number('42') == 42
    assert parse_number(' -1.5 ') == -1.5
    assert parse_number('1e3') == 1000


def test_rejects_non_numbers():
    assert parse_number(None) is None
    assert parse_number('NA') is None
    assert parse_number('inf') is None
    assert parse_number('nan') is None


def test_rejects_digit_group_separators():
    assert parse_number('1_000') is None
