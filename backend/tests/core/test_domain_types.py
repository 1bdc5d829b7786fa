"""Domain Types tests: Article payload shape and enum wire values."""

import dataclasses

import pytest

from wikitrains.core.domain_types import Article, ClientEvent, ServerEvent, Tier


def test_article_payload_uses_image_url_wire_key():
    article = Article("Ohio", "U.S. state", "https://img/ohio.svg")
    assert article.to_payload() == {
        "title": "Ohio",
        "description": "U.S. state",
        "imageURL": "https://img/ohio.svg",
    }


def test_article_from_payload():
    payload = {"title": "Ohio", "description": "U.S. state", "imageURL": "https://img/ohio.svg"}
    assert Article.from_payload(payload) == Article("Ohio", "U.S. state", "https://img/ohio.svg")


def test_article_is_immutable():
    article = Article("Ohio", "U.S. state", "https://img/ohio.svg")
    with pytest.raises(dataclasses.FrozenInstanceError):
        article.title = "Iowa"


def test_tier_wire_names():
    assert Tier.ONE.value == "tierOne"
    assert Tier.TWO.value == "tierTwo"


def test_event_wire_names():
    assert {e.value for e in ClientEvent} == {
        "initGame", "endingArticleChosen", "nextArticleChosen",
    }
    assert ServerEvent.INIT_ARTICLES.value == "initArticles"
    assert ServerEvent.NEW_CHOICES.value == "newChoices"
