import pytest

from sms_parser.classifier import MessageClassifier


@pytest.fixture
def classifier(registry):
    return MessageClassifier(registry)


class TestExclusions:
    @pytest.mark.parametrize(
        "body",
        [
            "123456 is your OTP for txn of Rs.500 at Amazon. Do not share it with anyone.",
            "Get 10% cashback offer on Rs.1000 spent with your card. Apply now!",
            "RAHUL KUMAR has requested money Rs.500 from you on Google Pay",
            "Your credit card bill of Rs.5,000 is due on 15-01-24",
            "Rs.499 will be debited from your a/c on 15-01-24 for Netflix",
            "E-mandate created for Rs.499 towards Netflix from A/c XX1234",
        ],
    )
    def test_non_transaction_messages(self, classifier, make_message, body):
        assert classifier.is_bank_message(make_message(body, sender="VM-HDFCBK")) is False

    def test_balance_only_message(self, classifier, make_message):
        body = "Avl Bal in A/c XX1234 is Rs.5,000.00 as on 12-01-24"
        assert classifier.is_bank_message(make_message(body, sender="VM-HDFCBK")) is False

    def test_empty_body(self, classifier, make_message):
        assert classifier.is_bank_message(make_message("   ")) is False


class TestBankMessages:
    def test_registered_sender_needs_only_amount(self, classifier, make_message):
        body = "Rs.500.00 towards your HDFC Bank A/c XX1234 on 12-01-24."
        assert classifier.is_bank_message(make_message(body, sender="VM-HDFCBK")) is True

    def test_registered_sender_with_override_amount(self, classifier, make_message):
        body = "Your A/C XXXXX5678 has been debited by 1,500.00 on 12Jan24 trf to RAHUL KUMAR Refno 402345678901"
        assert classifier.is_bank_message(make_message(body, sender="VM-SBIINB")) is True

    def test_unregistered_sender_needs_verb(self, classifier, make_message):
        assert classifier.is_bank_message(make_message("Your order of Rs.500 is confirmed", sender="AD-FLIPKT")) is False
        assert classifier.is_bank_message(make_message("Rs.500 debited from A/c XX1234 via UPI", sender="AX-NEWBNK")) is True

    def test_message_without_amount(self, classifier, make_message):
        assert classifier.is_bank_message(make_message("Your A/c XX1234 has been debited.")) is False

    def test_filter_keeps_input_order(self, classifier, make_message):
        messages = [
            make_message("Rs.100 debited from A/c XX1234"),
            make_message("123456 is your OTP. Do not share."),
            make_message("Rs.200 credited to A/c XX1234"),
        ]
        kept = classifier.filter_bank_messages(messages)
        assert [m.id for m in kept] == [messages[0].id, messages[2].id]


class TestHelpers:
    def test_has_transaction_verb_uses_bank_keywords(self, registry):
        sbi = registry.find_by_sender("VM-SBIINB")
        body = "Rs.300 trf to RAHUL KUMAR"

        assert MessageClassifier.has_transaction_verb(body) is False
        assert MessageClassifier.has_transaction_verb(body, sbi) is True

    def test_is_excluded(self):
        assert MessageClassifier.is_excluded("Use OTP 1234 to login")
        assert not MessageClassifier.is_excluded("Rs.100 debited from A/c XX1234")
