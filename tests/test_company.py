"""Testes da entidade Company e da criação de cotações."""
import pytest

from core.entities import Company, Exchange
from core.exceptions import AlreadyListed, InvalidArgument, InvalidName, MarketError


class TestCompany:

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_rejected(self, name):
        with pytest.raises(InvalidName):
            Company(name)

    def test_non_string_name_rejected(self):
        with pytest.raises(InvalidName):
            Company(None)

    def test_invalid_name_is_invalid_argument(self):
        with pytest.raises(InvalidArgument):
            Company("")

    def test_list_on_creates_listing(self, acme, nyse):
        acme.list_on(nyse, 100, 10)

        listing = nyse.find_listing(acme)
        assert listing.company is acme
        assert listing.exchange_name == "NYSE"
        assert listing.total_shares == 100
        assert listing.available_shares() == 100
        assert listing.unit_price == 10
        assert dict(listing.holdings_view()) == {}
        assert acme.is_listed_on(nyse)

    def test_list_twice_raises_already_listed(self, acme, nyse):
        acme.list_on(nyse, 100, 10)

        with pytest.raises(AlreadyListed):
            acme.list_on(nyse, 50, 99)

        listing = nyse.find_listing(acme)
        assert listing.total_shares == 100
        assert listing.unit_price == 10
        assert len(nyse.listings()) == 1

    @pytest.mark.parametrize("shares, price", [(0, 10), (-1, 10), (100, 0), (100, -5)])
    def test_non_positive_values_rejected(self, acme, nyse, shares, price):
        with pytest.raises(InvalidArgument):
            acme.list_on(nyse, shares, price)

        assert not acme.is_listed_on(nyse)
        assert nyse.listings() == ()

    def test_missing_exchange_rejected(self, acme):
        with pytest.raises(InvalidArgument):
            acme.list_on(None, 100, 10)

    def test_exchanges_sorted_by_name(self, system, acme):
        for name in ("NYSE", "BVMF", "LSE"):
            acme.list_on(system.exchange(name), 10, 1)

        assert [e.name for e in acme.exchanges()] == ["BVMF", "LSE", "NYSE"]

    def test_same_company_on_several_exchanges_is_independent(self, system, acme, nyse):
        lse = system.exchange("LSE")
        acme.list_on(nyse, 100, 10)
        acme.list_on(lse, 30, 7)

        assert nyse.find_listing(acme).unit_price == 10
        assert lse.find_listing(acme).unit_price == 7
        assert nyse.find_listing(acme) != lse.find_listing(acme)

    def test_identity_by_name(self):
        assert Company("Acme") == Company("Acme")
        assert hash(Company("Acme")) == hash(Company("Acme"))
        assert sorted([Company("b"), Company("a")]) == [Company("a"), Company("b")]
        assert Company("Acme") != Exchange("Acme")

    def test_errors_share_root(self, acme, nyse):
        acme.list_on(nyse, 1, 1)
        with pytest.raises(MarketError):
            acme.list_on(nyse, 1, 1)
