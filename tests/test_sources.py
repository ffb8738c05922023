import io
from urllib import error

import pytest

from access_report import sources
from access_report.errors import SourceReadError
from access_report.sources import LogSource, is_url


def test_is_url():
    assert is_url('https://example.com/access.log')
    assert is_url('HTTP://example.com/access.log')
    assert not is_url('logs/*.log')


def test_glob_reads_files_in_sorted_order(tmp_path, monkeypatch):
    (tmp_path / 'logs').mkdir()
    (tmp_path / 'logs' / 'b.log').write_text('b1\nb2\n', encoding='utf-8')
    (tmp_path / 'logs' / 'a.log').write_text('a1\n', encoding='utf-8')
    (tmp_path / 'logs' / 'other.txt').write_text('x\n', encoding='utf-8')
    monkeypatch.chdir(tmp_path)

    source = LogSource('logs/*.log')
    lines = list(source)

    assert [(line_number, line) for _, line_number, line in lines] == [(1, 'a1'), (1, 'b1'), (2, 'b2')]
    assert [label.replace('\\', '/') for label in source.labels] == ['logs/a.log', 'logs/b.log']


def test_recursive_glob(tmp_path, monkeypatch):
    (tmp_path / 'x' / 'y').mkdir(parents=True)
    (tmp_path / 'x' / 'y' / 'access.log').write_text('line\n', encoding='utf-8')
    monkeypatch.chdir(tmp_path)
    assert [line for _, _, line in LogSource('**/access.log')] == ['line']


def test_unreadable_file_contributes_nothing(tmp_path, monkeypatch, caplog):
    (tmp_path / 'bad.log').write_bytes(b'\xff\xfe\xfa\n')
    (tmp_path / 'good.log').write_text('ok\n', encoding='utf-8')
    monkeypatch.chdir(tmp_path)

    source = LogSource('*.log')
    assert [line for _, _, line in source] == ['ok']
    assert source.labels == ['good.log']
    assert 'bad.log' in caplog.text


def test_no_match_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SourceReadError):
        list(LogSource('*.log'))


def test_all_files_unreadable_raises(tmp_path, monkeypatch):
    (tmp_path / 'bad.log').write_bytes(b'\xff\xfe\xfa\n')
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SourceReadError):
        list(LogSource('*.log'))


class FakeHeaders:
    def __init__(self, charset):
        self.charset = charset

    def get_content_charset(self):
        return self.charset


class FakeResponse(io.BytesIO):
    def __init__(self, body, charset=None):
        super().__init__(body)
        self.headers = FakeHeaders(charset)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def test_url_source(monkeypatch):
    monkeypatch.setattr(
        sources.request, 'urlopen',
        lambda req, timeout: FakeResponse(b'first\nsecond\n'),
    )
    source = LogSource('http://example.com/access.log')
    assert list(source) == [
        ('http://example.com/access.log', 1, 'first'),
        ('http://example.com/access.log', 2, 'second'),
    ]
    assert source.labels == ['http://example.com/access.log']


def test_url_failure_raises(monkeypatch):
    def fail(req, timeout):
        raise error.URLError('unreachable')

    monkeypatch.setattr(sources.request, 'urlopen', fail)
    with pytest.raises(SourceReadError) as exc:
        list(LogSource('https://example.com/access.log'))
    assert 'example.com' in str(exc.value)


def test_url_http_error_raises(monkeypatch):
    def not_found(req, timeout):
        raise error.HTTPError(req.full_url, 404, 'Not Found', None, None)

    monkeypatch.setattr(sources.request, 'urlopen', not_found)
    with pytest.raises(SourceReadError) as exc:
        list(LogSource('https://example.com/missing.log'))
    assert 'HTTP 404 Not Found' in str(exc.value)
    assert 'https://example.com/missing.log' in str(exc.value)


def test_url_declared_charset_is_used(monkeypatch):
    monkeypatch.setattr(
        sources.request, 'urlopen',
        lambda req, timeout: FakeResponse('caf\xe9\n'.encode('latin-1'), charset='latin-1'),
    )
    assert [line for _, _, line in LogSource('http://example.com/access.log')] == ['caf\xe9']


def test_url_unknown_charset_raises(monkeypatch):
    monkeypatch.setattr(
        sources.request, 'urlopen',
        lambda req, timeout: FakeResponse(b'first\n', charset='x-bogus'),
    )
    with pytest.raises(SourceReadError) as exc:
        list(LogSource('http://example.com/access.log'))
    assert 'x-bogus' in str(exc.value)
