import pytest

from tourmarket.models import Difficulty, DurationBucket, Location, PriceBucket, TourListing
from tourmarket.services.filters import FilterCriteria, filter_tours


def make_listing(title, duration=4, group=12, price=249, difficulty=Difficulty.MEDIUM,
                 description='', address=''):
    return TourListing(
        title=title,
        description=description,
        location=Location(address),
        duration=duration,
        max_group_size=group,
        price=price,
        difficulty=difficulty
    )


@pytest.fixture
def listings():
    return [
        make_listing('Explore Ancient Rome', duration=3, group=15, price=199,
                     description='Visit the Colosseum', address='Rome, Italy'),
        make_listing('Paris Discovery', duration=4, group=12, price=249, difficulty=Difficulty.EASY,
                     description='Eiffel Tower and Louvre', address='Paris, France'),
        make_listing('Tokyo Adventure', duration=5, group=10, price=299,
                     description='Temples and districts', address='Tokyo, Japan'),
        make_listing('Lisbon Weekend', duration=2, group=5, price=90, difficulty=Difficulty.EASY,
                     address='Lisbon, Portugal'),
        make_listing('Andes Expedition', duration=12, group=6, price=1800,
                     difficulty=Difficulty.DIFFICULT, address='Cusco, Peru'),
    ]


class TestFilterTours:

    def test_empty_criteria_returns_everything_in_order(self, listings):
        assert filter_tours(listings, {}) == listings
        assert filter_tours(listings, None) == listings
        assert filter_tours(listings, FilterCriteria()) == listings

    def test_returns_new_list_without_touching_input(self, listings):
        before = list(listings)
        result = filter_tours(listings, {'search': 'paris'})
        result.clear()
        assert listings == before

    def test_search_matches_title_substring(self, listings):
        result = filter_tours(listings, {'search': 'Discov'})
        assert listings[1] in result

    def test_search_is_case_insensitive_across_fields(self, listings):
        assert [t.title for t in filter_tours(listings, {'search': 'COLOSSEUM'})] == ['Explore Ancient Rome']
        assert [t.title for t in filter_tours(listings, {'search': 'japan'})] == ['Tokyo Adventure']

    def test_difficulty_exact_match(self, listings):
        result = filter_tours(listings, {'difficulty': 'easy'})
        assert [t.title for t in result] == ['Paris Discovery', 'Lisbon Weekend']

    def test_short_duration_bucket(self, listings):
        result = filter_tours(listings, {'duration': '1-3'})
        assert result
        assert all(t.duration <= 3 for t in result)

    def test_medium_duration_bucket(self, listings):
        result = filter_tours(listings, {'duration': '4-7'})
        assert [t.title for t in result] == ['Paris Discovery', 'Tokyo Adventure']
        assert all(3 < t.duration <= 7 for t in result)

    def test_long_duration_bucket_accepts_symbolic_name(self, listings):
        result = filter_tours(listings, {'duration': 'long'})
        assert [t.title for t in result] == ['Andes Expedition']

    def test_group_size_buckets(self, listings):
        assert [t.title for t in filter_tours(listings, {'groupSize': '1-5'})] == ['Lisbon Weekend']
        assert [t.title for t in filter_tours(listings, {'groupSize': '6-10'})] == ['Tokyo Adventure', 'Andes Expedition']
        assert [t.title for t in filter_tours(listings, {'groupSize': '11+'})] == ['Explore Ancient Rome', 'Paris Discovery']

    def test_price_buckets(self, listings):
        assert [t.title for t in filter_tours(listings, {'priceRange': '0-100'})] == ['Lisbon Weekend']
        assert len(filter_tours(listings, {'priceRange': '101-300'})) == 3
        assert [t.title for t in filter_tours(listings, {'priceRange': '301+'})] == ['Andes Expedition']

    def test_price_boundaries(self):
        edge = [make_listing('A', price=100), make_listing('B', price=100.5), make_listing('C', price=300),
                make_listing('D', price=300.01)]
        assert [t.title for t in filter_tours(edge, {'priceRange': 'low'})] == ['A']
        assert [t.title for t in filter_tours(edge, {'priceRange': 'mid'})] == ['B', 'C']
        assert [t.title for t in filter_tours(edge, {'priceRange': 'high'})] == ['D']

    def test_criteria_are_conjunctive(self, listings):
        result = filter_tours(listings, {'difficulty': 'easy', 'priceRange': '101-300'})
        assert [t.title for t in result] == ['Paris Discovery']

    def test_unrecognized_values_do_not_constrain(self, listings):
        result = filter_tours(listings, {'duration': 'forever', 'priceRange': '???', 'difficulty': 'extreme'})
        assert result == listings

    def test_paris_scenario(self):
        tours = [make_listing('Paris Discovery', duration=4, group=12, price=249, difficulty=Difficulty.EASY)]
        assert filter_tours(tours, {'search': 'paris'}) == tours
        assert filter_tours(tours, {'priceRange': '0-100'}) == []


class TestFilterCriteria:

    def test_from_args_maps_query_names(self):
        criteria = FilterCriteria.from_args({
            'search': '  rome ',
            'difficulty': 'Medium',
            'duration': '1-3',
            'groupSize': '11+',
            'priceRange': '101-300'
        })
        assert criteria.search == 'rome'
        assert criteria.difficulty == Difficulty.MEDIUM
        assert criteria.duration == DurationBucket.SHORT
        assert criteria.price_range == PriceBucket.MID
        assert criteria.to_dict()['groupSize'] == 'large'

    def test_blank_values_are_empty(self):
        criteria = FilterCriteria.from_args({'search': '', 'duration': '', 'priceRange': None})
        assert criteria.is_empty

    def test_direct_construction_accepts_labels(self, listings):
        criteria = FilterCriteria(price_range='0-100', duration='1-3', group_size='small')

        assert criteria.price_range == PriceBucket.LOW
        assert criteria.duration == DurationBucket.SHORT
        assert [t.title for t in filter_tours(listings, criteria)] == ['Lisbon Weekend']

    def test_direct_construction_accepts_difficulty_name(self, listings):
        result = filter_tours(listings, FilterCriteria(difficulty='easy'))

        assert [t.title for t in result] == ['Paris Discovery', 'Lisbon Weekend']

    def test_direct_construction_drops_unknown_values(self, listings):
        criteria = FilterCriteria(difficulty='extreme', price_range='free', duration=42)

        assert criteria.is_empty
        assert filter_tours(listings, criteria) == listings

    def test_enum_members_in_mapping(self, listings):
        result = filter_tours(listings, {'difficulty': Difficulty.DIFFICULT, 'duration': DurationBucket.LONG})

        assert [t.title for t in result] == ['Andes Expedition']
