import responses

from bloodhound.client import ClientConfig
from bloodhound.evaluator import apply_content_rules, apply_resource_rules, evaluate, rank
from bloodhound.htmldoc import parse_html
from bloodhound.pipeline import Context
from bloodhound.rules import (
    Ruleset,
    content_rule,
    element_content,
    match_content,
    resource_rule,
)

LOGIN_PAGE = """<!DOCTYPE html>
<head><title>Login Page</title></head>
<body>
<form action="/login" method="post">
<input type="email" name="login" id="login">
<input type="hidden" name="_token">
</form>
</body>
</html>"""

SEARCH_PAGE = "<html><body><p>Search results</p></body></html>"


def make_ruleset():
    return Ruleset(
        name="test",
        rules=[
            resource_rule("Match login page", 1, False, match_content(["login", "auth"])),
            resource_rule("Remove about page", 2, True, match_content(["about"])),
            content_rule("Has form", 2, False, element_content("form", None)),
            content_rule("Logout text", 4, True, match_content(["Logged out"])),
        ],
    )


def test_apply_resource_rules_scores_and_removes():
    contexts = [Context("http://localhost/login"), Context("http://localhost/about"), Context("http://localhost/x")]
    results = list(apply_resource_rules(make_ruleset(), contexts))
    assert [(c.url, c.score) for c in results] == [
        ("http://localhost/login", 1),
        ("http://localhost/x", 0),
    ]


def test_apply_content_rules_scores_and_removes():
    contexts = [
        Context("http://localhost/login", content=parse_html(LOGIN_PAGE), score=1),
        Context("http://localhost/logout", content=parse_html("<p>Logged out</p>")),
        Context("http://localhost/none"),
    ]
    results = list(apply_content_rules(make_ruleset(), contexts))
    assert [(c.url, c.score) for c in results] == [
        ("http://localhost/login", 3),
        ("http://localhost/none", 0),
    ]


def test_rank_orders_by_descending_score():
    contexts = [Context("a", score=1), Context("b", score=5), Context("c", score=3)]
    ranked = rank(contexts)
    assert [c.url for c in ranked] == ["b", "c", "a"]
    scores = [c.score for c in ranked]
    assert scores == sorted(scores, reverse=True)


def test_rank_of_nothing_is_empty():
    assert rank([]) == []


def test_evaluate_end_to_end():
    urls = [
        "http://localhost:5555/search",
        "http://localhost:5555/about",
        "http://localhost:5555/login",
        "http://localhost:5555/missing",
    ]
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://localhost:5555/search", body=SEARCH_PAGE)
        rsps.add(responses.GET, "http://localhost:5555/login", body=LOGIN_PAGE)
        rsps.add(responses.GET, "http://localhost:5555/missing", status=404)
        results = evaluate(urls, make_ruleset(), ClientConfig(rate=1000))
    assert [(c.url, c.score) for c in results] == [
        ("http://localhost:5555/login", 3),
        ("http://localhost:5555/search", 0),
    ]


def test_evaluate_with_no_targets():
    with responses.RequestsMock(assert_all_requests_are_fired=False):
        assert evaluate([], make_ruleset(), ClientConfig(rate=1000)) == []