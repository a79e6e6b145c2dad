"""
Filter normalization and search URL tests.

Run with: pytest tests/test_filters.py -v
"""

from fractions import Fraction

import pytest

from linkedin_jobs.models.filters import FilterState, normalize_filters


BASE_URL = "https://www.linkedin.com/jobs-guest/jobs/api/seeMoreJobPostings/search"


class TestFilterNormalization:
    """Test caller input is normalized without ever raising."""

    def test_defaults(self):
        """Test empty input gives empty filters on the default host."""
        state = normalize_filters()

        assert state.host == "www.linkedin.com"
        assert state.keyword == ""
        assert state.location == ""
        assert state.limit == 0
        assert state.page == 0
        assert state.search_url() == f"{BASE_URL}?start=0"

    def test_whitespace_collapsed_to_plus(self):
        """Test keyword and location are trimmed and joined with '+'."""
        state = normalize_filters(keyword="  software   engineer \n", location=" los angeles ")

        assert state.keyword == "software+engineer"
        assert state.location == "los+angeles"

    def test_limit_and_page_coercion(self):
        """Test numeric options accept strings and fall back to 0."""
        assert normalize_filters(limit="1").limit == 1
        assert normalize_filters(limit="2.7").limit == 2
        assert normalize_filters(limit=" 10 ").limit == 10
        assert normalize_filters(limit="abc").limit == 0
        assert normalize_filters(limit=-5).limit == 0
        assert normalize_filters(limit=float("nan")).limit == 0
        assert normalize_filters(limit=None).limit == 0
        assert normalize_filters(page="3").page == 3
        assert normalize_filters(page=[1]).page == 0
        # ints bypass float so huge values neither overflow nor round
        huge = 10 ** 400
        assert normalize_filters(limit=huge).limit == huge
        assert normalize_filters(page=huge).page == huge
        assert normalize_filters(limit=2 ** 53 + 1).limit == 2 ** 53 + 1
        assert normalize_filters(limit=-huge).limit == 0
        assert normalize_filters(limit=Fraction(huge)).limit == 0
        assert normalize_filters(limit="1e400").limit == 0

    def test_camel_case_aliases(self):
        """Test the JavaScript client's option names are accepted."""
        state = normalize_filters({
            "dateSincePosted": "past week",
            "jobType": "contract",
            "remoteFilter": "hybrid",
            "experienceLevel": "senior",
            "sortBy": "relevant",
        })

        assert state.date_since_posted == "r604800"
        assert state.job_type == "C"
        assert state.remote_filter == "3"
        assert state.experience_level == "4"
        assert state.sort_by == "R"

    def test_unknown_options_ignored(self):
        """Test unrecognized option names are dropped."""
        state = normalize_filters({"keyword": "python", "colour": "blue"})

        assert state == normalize_filters(keyword="python")

    def test_keyword_arguments_override_mapping(self):
        """Test keyword options win over the mapping."""
        state = normalize_filters({"keyword": "java"}, keyword="python")

        assert state.keyword == "python"

    def test_filter_state_passes_through(self):
        """Test an existing FilterState is returned unchanged."""
        state = normalize_filters(keyword="python")

        assert FilterState.from_raw(state) is state

    def test_blank_host_uses_default(self):
        """Test a blank host falls back to the default."""
        assert normalize_filters(host="   ").host == "www.linkedin.com"
        assert normalize_filters(host=" de.linkedin.com ").host == "de.linkedin.com"

    def test_filters_are_immutable(self):
        """Test FilterState cannot be modified after construction."""
        state = normalize_filters(keyword="python")

        with pytest.raises(AttributeError):
            state.keyword = "java"


class TestLookupTables:
    """Test enum options map to the endpoint's codes."""

    @pytest.mark.parametrize("value, code", [
        ("past month", "r2592000"),
        ("Past Week", "r604800"),
        ("24HR", "r86400"),
        ("past-week", "r604800"),
    ])
    def test_date_since_posted(self, value, code):
        assert normalize_filters(date_since_posted=value).date_since_posted == code

    @pytest.mark.parametrize("value, code", [
        ("internship", "1"),
        ("Entry Level", "2"),
        ("associate", "3"),
        ("SENIOR", "4"),
        ("director", "5"),
        ("executive", "6"),
    ])
    def test_experience_level(self, value, code):
        assert normalize_filters(experience_level=value).experience_level == code

    @pytest.mark.parametrize("value, code", [
        ("full time", "F"),
        ("Full-Time", "F"),
        ("part time", "P"),
        ("part-time", "P"),
        ("contract", "C"),
        ("temporary", "T"),
        ("volunteer", "V"),
        ("internship", "I"),
    ])
    def test_job_type(self, value, code):
        assert normalize_filters(job_type=value).job_type == code

    @pytest.mark.parametrize("value, code", [
        ("on-site", "1"),
        ("On Site", "1"),
        ("remote", "2"),
        ("Hybrid", "3"),
    ])
    def test_remote_filter(self, value, code):
        assert normalize_filters(remote_filter=value).remote_filter == code

    @pytest.mark.parametrize("value, code", [
        ("40000", "1"),
        (60000, "2"),
        (80000.0, "3"),
        (" 100000 ", "4"),
        ("120000", "5"),
    ])
    def test_salary(self, value, code):
        assert normalize_filters(salary=value).salary == code

    @pytest.mark.parametrize("value, code", [
        ("recent", "DD"),
        ("Relevant", "R"),
    ])
    def test_sort_by(self, value, code):
        assert normalize_filters(sort_by=value).sort_by == code

    @pytest.mark.parametrize("option", [
        "date_since_posted",
        "experience_level",
        "job_type",
        "remote_filter",
        "salary",
        "sort_by",
    ])
    def test_unknown_value_same_as_omitted(self, option):
        """Test an unmapped value renders the same URL as leaving it out."""
        with_junk = normalize_filters(keyword="python", **{option: "not-a-real-value"})
        without = normalize_filters(keyword="python")

        assert with_junk.search_url() == without.search_url()
        assert getattr(with_junk, option) == ""


class TestSearchUrl:
    """Test search URL rendering."""

    def test_full_query(self):
        """Test every parameter appears in the fixed order."""
        state = normalize_filters({
            "keyword": "software engineer",
            "location": "los angeles",
            "dateSincePosted": "past Week",
            "jobType": "full time",
            "remoteFilter": "remote",
            "salary": "100000",
            "experienceLevel": "entry level",
            "limit": "1",
            "sortBy": "recent",
        })

        assert state.search_url(0) == (
            f"{BASE_URL}?keywords=software%2Bengineer&location=los%2Bangeles"
            "&f_TPR=r604800&f_SB2=4&f_E=2&f_WT=2&f_JT=F&start=0&sortBy=DD"
        )

    def test_only_set_parameters_included(self):
        """Test unset filters are left out of the URL."""
        url = normalize_filters(keyword="python", remote_filter="remote").search_url(25)

        assert url == f"{BASE_URL}?keywords=python&f_WT=2&start=25"

    def test_values_are_percent_encoded(self):
        """Test reserved characters in values are encoded."""
        url = normalize_filters(keyword="C++ & C#", location="São Paulo").search_url()

        assert "keywords=C%2B%2B%2B%26%2BC%23" in url
        assert "location=S%C3%A3o%2BPaulo" in url

    def test_deterministic(self):
        """Test the same filters and start always render the same URL."""
        first = normalize_filters(keyword="data engineer", location="Berlin", sort_by="recent")
        second = normalize_filters(keyword=" data  engineer", location="Berlin ", sort_by="RECENT")

        assert first.search_url(50) == second.search_url(50)
        assert first.cache_key == second.cache_key == first.search_url(0)

    def test_page_shifts_start(self):
        """Test page adds page * 25 to the start offset."""
        assert normalize_filters(page=2).search_url(0).endswith("start=50")
        assert normalize_filters(page=2).search_url(25).endswith("start=75")

    def test_custom_host(self):
        """Test the host option changes the URL host."""
        url = normalize_filters(host="de.linkedin.com").search_url()

        assert url.startswith("https://de.linkedin.com/jobs-guest/jobs/api/seeMoreJobPostings/search?")

    def test_negative_start_rejected(self):
        """Test a negative start offset is a programming error."""
        with pytest.raises(ValueError):
            normalize_filters().search_url(-25)

    def test_limit_not_part_of_url(self):
        """Test limit does not change the URL (and so shares the cache key)."""
        assert normalize_filters(keyword="go", limit=5).search_url() == normalize_filters(keyword="go").search_url()
