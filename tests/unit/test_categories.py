import pytest

from showfinder.utils.categories import CATEGORIES, CATEGORY_RULES, classify


def test_rule_order_is_priority_order():
    assert [label for label, _ in CATEGORY_RULES] == [
        "Weekly Markets",
        "Horror & Oddities",
        "Cons & Expos",
        "Parades & Carnivals",
        "Arts & Crafts",
    ]
    assert CATEGORIES[-1] == "Festivals & Fairs"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Andover Drive-In Flea Market", "Weekly Markets"),
        ("Downtown Farmers Market", "Weekly Markets"),
        ("Haunted Hayride Vendor Night", "Horror & Oddities"),
        ("Expedition Oddmall", "Horror & Oddities"),
        ("Canton Comic Con", "Cons & Expos"),
        ("Toy Show & Collectibles", "Cons & Expos"),
        ("Founders Day Parade", "Parades & Carnivals"),
        ("Handmade Holiday Bazaar", "Arts & Crafts"),
        ("Winter Wonderfest V", "Festivals & Fairs"),
        ("Bacon Fest", "Festivals & Fairs"),
    ],
)
def test_classify_each_rule(name, expected):
    assert classify(name) == expected


def test_market_beats_craft():
    assert classify("Weekly Flea Market and Craft Fair") == "Weekly Markets"
    assert classify("Craft Show", "open every Saturday") == "Weekly Markets"


def test_horror_beats_craft():
    assert classify("Haunted Craft Bazaar") == "Horror & Oddities"


def test_classify_never_returns_none():
    assert classify("") == "Festivals & Fairs"
    assert classify(None, None) == "Festivals & Fairs"
