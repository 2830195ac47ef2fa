import unittest

from game import (
    Deck,
    add_card,
    set_card_text,
    delete_card,
    list_cards,
    clear_deck,
    new_card_id,
)


class TestDeckStore(unittest.TestCase):
    def test_given_many_ids_when_generated_then_unique_and_sorted(self):
        ids = [new_card_id() for _ in range(500)]
        self.assertEqual(len(set(ids)), 500)
        self.assertEqual(ids, sorted(ids))

    def test_given_empty_deck_when_adding_cards_then_fresh_ids_without_text(self):
        deck = add_card(Deck())
        deck = add_card(deck, photo="data:image/png;base64,AAAA")
        self.assertEqual(len(deck), 2)
        rows = list_cards(deck)
        self.assertEqual(rows[0][1], None)
        self.assertEqual(rows[0][2], None)
        self.assertEqual(rows[1][2], "data:image/png;base64,AAAA")
        self.assertNotEqual(rows[0][0], rows[1][0])

    def test_given_taken_id_when_adding_then_existing_card_not_overwritten(self):
        deck = add_card(Deck(), card_id="a")
        deck = set_card_text(deck, "a", "cat")
        deck = add_card(deck, photo="p", card_id="a")
        self.assertEqual(len(deck), 2)
        self.assertEqual(deck.get("a").text, "cat")
        self.assertIsNone(deck.get("a").photo)

    def test_given_add_delete_sequence_when_counting_then_size_matches(self):
        deck = Deck()
        for _ in range(5):
            deck = add_card(deck)
        ids = deck.ids()
        deck = delete_card(deck, ids[0])
        deck = delete_card(deck, ids[0])  # already gone
        deck = delete_card(deck, "missing")
        deck = delete_card(deck, ids[3])
        self.assertEqual(len(deck), 3)
        self.assertNotIn(ids[0], deck)
        self.assertIn(ids[1], deck)

    def test_given_unknown_id_when_deleting_then_same_deck_returned(self):
        deck = add_card(Deck())
        self.assertIs(delete_card(deck, "nope"), deck)

    def test_given_text_when_set_then_replaced_and_empty_text_is_noop(self):
        deck = add_card(Deck(), card_id="a")
        self.assertIsNone(set_card_text(deck, "a", "").get("a").text)
        deck = set_card_text(deck, "a", "cat")
        self.assertEqual(deck.get("a").text, "cat")
        deck = set_card_text(deck, "a", "")
        self.assertEqual(deck.get("a").text, "cat")
        deck = set_card_text(deck, "a", "dog")
        self.assertEqual(deck.get("a").text, "dog")

    def test_given_unknown_id_when_setting_text_then_unchanged(self):
        deck = add_card(Deck(), card_id="a")
        self.assertIs(set_card_text(deck, "b", "cat"), deck)

    def test_given_cards_added_out_of_order_when_listing_then_key_order(self):
        deck = add_card(Deck(), card_id="c")
        deck = add_card(deck, card_id="a")
        deck = add_card(deck, card_id="b")
        self.assertEqual([r[0] for r in list_cards(deck)], ["a", "b", "c"])

    def test_given_deck_when_listing_then_deck_unchanged(self):
        deck = set_card_text(add_card(Deck(), card_id="a"), "a", "cat")
        before = deck
        list_cards(deck)
        self.assertEqual(deck, before)

    def test_given_mixed_cards_when_filtering_playable_then_empty_cards_dropped(self):
        deck = add_card(Deck(), card_id="a")
        deck = add_card(deck, card_id="b", photo="p")
        deck = set_card_text(add_card(deck, card_id="c"), "c", "x")
        self.assertEqual([c.id for c in deck.playable()], ["b", "c"])
        self.assertEqual(len(clear_deck()), 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
