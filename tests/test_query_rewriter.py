"""Tests for prompt expansion."""

import pytest

from serp_search_hub.query_routing.query_rewriter import (
    QueryExpander,
    QueryRewriter,
    RewriteTemplate,
)
from serp_search_hub.utils.errors import ExpansionError


@pytest.fixture
def rewriter():
    return QueryRewriter()


def test_compound_prompt_is_split(rewriter):
    """Each question in a prompt becomes its own query."""
    queries = rewriter.expand("What is Garlic? Is there a benefit for eating onions")

    assert queries == ["What is Garlic", "Is there a benefit for eating onions"]


def test_single_query_is_kept(rewriter):
    """A prompt with one clause expands to itself, minus the terminator."""
    assert rewriter.expand("  best   garlic recipes?  ") == ["best garlic recipes"]


def test_periods_inside_tokens_do_not_split(rewriter):
    """Decimal points and domain names stay inside their clause."""
    assert rewriter.expand("python 3.12 release notes on docs.python.org") == [
        "python 3.12 release notes on docs.python.org"
    ]


def test_sentence_periods_split(rewriter):
    """A period followed by whitespace ends a clause."""
    assert rewriter.expand("Garlic history. Onion varieties.") == [
        "Garlic history",
        "Onion varieties",
    ]


@pytest.mark.parametrize(
    ("prompt", "expected"),
    [
        ("Can you tell me about black garlic?", "black garlic"),
        ("Please explain allicin", "allicin"),
        ("Hi, could you find onion soup recipes", "onion soup recipes"),
        ("I want to know whether onions are healthy", "onions are healthy"),
    ],
)
def test_conversational_lead_ins_are_removed(rewriter, prompt, expected):
    """Rewrite templates strip filler around the actual query."""
    assert rewriter.expand(prompt) == [expected]


def test_leading_conjunctions_are_removed(rewriter):
    """Clauses starting with a conjunction lose it after splitting."""
    assert rewriter.expand("What is garlic; and what is an onion?") == [
        "What is garlic",
        "what is an onion",
    ]


def test_duplicate_clauses_are_dropped(rewriter):
    """Repeated clauses are kept once, ignoring case."""
    assert rewriter.expand("What is garlic? what is GARLIC? Garlic uses") == [
        "What is garlic",
        "Garlic uses",
    ]


def test_max_queries_caps_output():
    """No more than max_queries queries are produced."""
    rewriter = QueryRewriter(max_queries=2)

    assert rewriter.expand("a? b? c? d?") == ["a", "b"]


def test_invalid_max_queries():
    """max_queries must be positive."""
    with pytest.raises(ValueError):
        QueryRewriter(max_queries=0)


def test_empty_prompt_raises(rewriter):
    """A prompt with no usable clause cannot be expanded."""
    with pytest.raises(ExpansionError):
        rewriter.expand(" ?! ; ")


def test_custom_templates():
    """Custom templates replace the defaults."""
    rewriter = QueryRewriter(
        templates=[RewriteTemplate(pattern=r"^define (.+)$", replacement=r"\1 meaning")]
    )

    assert rewriter.expand("define allium") == ["allium meaning"]
    assert rewriter.expand("tell me about garlic") == ["tell me about garlic"]


def test_rewriter_is_a_query_expander(rewriter):
    """The rewriter satisfies the expander protocol."""
    assert isinstance(rewriter, QueryExpander)
