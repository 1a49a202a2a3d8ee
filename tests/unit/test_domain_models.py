"""Tests for domain entity behaviour."""

from datetime import datetime

from athenaeum.domain.models import Author, Book, BookDomain, Borrowing, Reader


def _loan(returned: bool = False) -> Borrowing:
    return Borrowing(
        is_active=not returned,
        return_date=datetime(2026, 1, 1) if returned else None,
    )


class TestBook:
    """Tests for copy accounting on Book."""

    def test_available_copies_excludes_reading_room_and_loans(self):
        book = Book(
            total_copies=10,
            reading_room_only_copies=3,
            borrowing_records=[_loan(), _loan(), _loan(returned=True)],
        )

        assert book.get_active_loan_count() == 2
        assert book.get_available_copies() == 5

    def test_available_copies_never_negative(self):
        book = Book(
            total_copies=2,
            reading_room_only_copies=1,
            borrowing_records=[_loan(), _loan()],
        )

        assert book.get_available_copies() == 0

    def test_active_flag_decides_loan_count(self):
        book = Book(
            total_copies=4,
            borrowing_records=[Borrowing(), Borrowing(is_active=True)],
        )

        assert book.get_active_loan_count() == 1
        assert book.get_available_copies() == 3

    def test_can_be_loanable(self):
        assert Book(total_copies=3, reading_room_only_copies=2).can_be_loanable()
        assert not Book(total_copies=2, reading_room_only_copies=2).can_be_loanable()

    def test_domain_ids(self):
        book = Book(domains=[BookDomain(id=4), BookDomain(id=9)])

        assert book.domain_ids == [4, 9]

    def test_defaults(self):
        book = Book()

        assert book.id == 0
        assert book.title == ""
        assert book.authors == []
        assert book.borrowing_records == []


def test_reader_full_name():
    """Test names are joined with a single space."""
    assert Reader(first_name="Ada", last_name="Lovelace").get_full_name() == "Ada Lovelace"
    assert Reader().get_full_name() == " "


def test_author_full_name():
    """Test author display name."""
    assert Author(first_name="Umberto", last_name="Eco").full_name == "Umberto Eco"


def test_domain_is_root():
    """Test domains without parent are roots."""
    assert BookDomain(id=1).is_root
    assert not BookDomain(id=2, parent_domain_id=1).is_root


class TestBorrowing:
    """Tests for overdue detection."""

    def test_active_loan_past_due_is_overdue(self):
        loan = Borrowing(is_active=True, due_date=datetime(2026, 3, 1))

        assert loan.is_overdue(datetime(2026, 3, 2))

    def test_returned_loan_is_never_overdue(self):
        loan = Borrowing(is_active=False, due_date=datetime(2026, 3, 1))

        assert not loan.is_overdue(datetime(2026, 4, 1))

    def test_loan_due_now_is_not_overdue(self):
        loan = Borrowing(is_active=True, due_date=datetime(2026, 3, 1))

        assert not loan.is_overdue(datetime(2026, 3, 1))
