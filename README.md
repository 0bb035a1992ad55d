# bloodhound

A URL resource evaluator and sorter. You give it a list of URLs and a YAML
ruleset. It scores each URL by its name, fetches it, and scores it again by
the HTML it serves. It then writes the URLs out with the highest score first.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```
bloodhound --input urls.txt --rules rules.yaml --output sorted.txt
```

| Option | Short | Default | Meaning |
| --- | --- | --- | --- |
| `--input` | `-i` | (required) | File with one URL per line. Lines are stripped and blank lines are ignored |
| `--rules` | `-r` | (required) | YAML ruleset file |
| `--output` | `-o` | `output.txt` | File to write the sorted URL list to, one URL per line |
| `--log-level` | `-l` | `info` | `trace`, `debug`, `info`, `warn`/`warning`, `error`, `fatal`, `panic`. An unknown name logs a warning and falls back to `info` |
| `--rate` | `-R` | `100` | HTTP requests allowed per second across all workers. It must be positive |
| `--headers` | `-H` | none | Custom request header as `"Key: Value"`. May be given more than once |
| `--proxy` | `-P` | none | Proxy server URL, e.g. `http://localhost:8080` |

Log messages are written to standard output. The command exits with status 0
on success. It exits with 1 in any of these cases:

- the input or ruleset file cannot be read;
- the ruleset is invalid;
- a header is malformed;
- the rate is not positive;
- a target answers with HTTP 429 Too Many Requests (try again with a lower `--rate`);
- the output file cannot be written.

Requests are sent by up to 10 worker threads that share one rate limiter.
Proxy settings from the environment are ignored; only `--proxy` is used.

## Rulesets

A ruleset is a YAML mapping with a `name` and a list of `rules`:

```yaml
name: example
rules:
  - name: Login page
    level: resource
    value: 10
    content:
      matches: ["login", "auth"]
  - name: Skip static assets
    level: resource
    remove: true
    content:
      matches: [".css", ".png"]
  - name: Has form
    level: content
    value: 5
    content:
      element: form
  - name: Hidden input
    level: content
    value: 2
    content:
      element: input
      attr:
        type: hidden
  - name: Mentions password
    level: content
    value: 3
    content:
      matches: ["password"]
```

- `resource` rules look at the URL string and need `matches`. A rule fires when
  any of its words is a substring of the URL.
- `content` rules look at the fetched HTML and need either `element` or
  `matches`.
  - An `element` rule fires on an element with that tag name. Each `attr`
    entry only rules a node out when the node has that attribute with a
    different value; a missing attribute does not prevent a match.
  - A `matches` rule fires when any word appears in a text node.
  - Each content rule counts at most once per document.
- A rule with `remove: true` drops the URL from the output when it fires.
- A rule with any other `level`, or without the content its level needs,
  makes the whole ruleset invalid.

Only URLs that answer `200 OK` reach the output. URLs whose request fails or
returns another status are left out. URLs with equal scores keep the order of
the input file.

## Library use

```python
from bloodhound.client import ClientConfig
from bloodhound.evaluator import evaluate
from bloodhound.rules import load_ruleset

ruleset = load_ruleset("rules.yaml")
results = evaluate(["http://localhost:5555/login"], ruleset, ClientConfig(rate=10))
for context in results:
    print(context.score, context.url)
```

Modules and what they provide:

- `bloodhound.rules`
  - `Level`, `Rule`, `RuleContent` and `Ruleset`.
  - `parse_ruleset` and `load_ruleset`, which raise `RulesetError`.
  - The builders `match_content`, `element_content`, `resource_rule` and
    `content_rule`.
- `bloodhound.evaluation`
  - `evaluate_url` and `evaluate_html`, which return an `EvaluationResult`
    (`score`, `remove`).
- `bloodhound.htmldoc`
  - `parse_html`, which builds a `Node` tree.
  - `Node.descendants()` and `Node.attr_map()`.
- `bloodhound.pipeline`
  - `Context` (`url`, `content`, `score`).
  - `retrieve_resource`, which raises `RateLimitedError` on HTTP 429.
- `bloodhound.evaluator`
  - `apply_resource_rules`, `apply_content_rules`, `rank` and `evaluate`.
- `bloodhound.client`
  - `ClientConfig` (`rate`, `headers`, `proxy`).
  - `BloodhoundClient`, a context manager with `get(url)` and `close()`.
- `bloodhound.cli`
  - `main`, `read_input_file`, `write_output_file`, `parse_log_level` and
    `parse_custom_headers`.

Example:

```python
from bloodhound.evaluation import evaluate_url
from bloodhound.rules import match_content, resource_rule

rules = [resource_rule("Match login page", 1, False, match_content(["login", "auth"]))]
print(evaluate_url("http://localhost/auth/login", rules))
# EvaluationResult(score=1, remove=False)
```

## What it does not do

- Every `200 OK` response body is parsed as HTML, whatever its content type.
  There is no separate handling for JSON or other formats.
- There is no passive mode. Each URL that survives the resource rules is
  requested.
- Failed requests are not retried.