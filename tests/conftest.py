"""Test configuration and fixtures for bucket-summary."""

import pytest

SAMPLE_REPORT = """\
2023-01-15 10:00:00       1024 raw/2023/01/15/file1.bin
2023-01-15 10:01:00       2048 raw/2023/01/15/file2.bin

Total Objects: 2
   Total Size: 3072
"""


def make_report(sizes):
    """Build a report text for objects of the given sizes."""
    lines = [
        f"2023-01-15 10:00:{i:02d} {size:>10} file{i}.bin"
        for i, size in enumerate(sizes)
    ]
    lines.append(f"Total Objects: {len(sizes)}")
    lines.append(f"   Total Size: {sum(sizes)}")
    return "\n".join(lines) + "\n"


class FakeReportSource:
    """In-memory report source keyed by prefix."""

    def __init__(self, reports, bucket="test-bucket", prefixes=None):
        self.bucket = bucket
        self.reports = reports
        self.prefixes = list(reports) if prefixes is None else prefixes
        self.fetched = []

    def list_prefixes(self):
        return list(self.prefixes)

    def fetch_report(self, prefix):
        self.fetched.append(prefix)
        report = self.reports[prefix]
        if isinstance(report, Exception):
            raise report
        return report


@pytest.fixture
def sample_report():
    """A well-formed two-object report."""
    return SAMPLE_REPORT


@pytest.fixture
def fake_source():
    """A source with three date prefixes."""
    return FakeReportSource(
        {
            "raw/20230115/": make_report([1024, 2048]),
            "raw/20230116/": make_report([1048576]),
            "raw/20230117/": make_report([10, 20, 30]),
        }
    )


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path
