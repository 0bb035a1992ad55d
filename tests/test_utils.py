from bloodhound.utils import contains_any


def test_word_present():
    assert contains_any("http://localhost/login", ["login", "auth"]) is True


def test_second_word_present():
    assert contains_any("http://auth.localhost/", ["login", "auth"]) is True


def test_no_word_present():
    assert contains_any("http://localhost/potato", ["login", "auth"]) is False


def test_empty_word_list_never_matches():
    assert contains_any("http://localhost/login", []) is False


def test_empty_word_matches_everything():
    assert contains_any("anything", [""]) is True


def test_accepts_generator():
    words = (w for w in ["x", "url="])
    assert contains_any("http://localhost/request?url=a", words) is True