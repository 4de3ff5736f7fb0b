"""
Tests for fastaseek.access (sessions and access modes).
"""

import pytest
from Bio import SeqIO

from fastaseek.access.session import FastaSession, open_fasta
from fastaseek.core.errors import (
    FormatError,
    IoError,
    NotFoundError,
    NotIndexedError,
    OutOfRangeError,
)
from fastaseek.index import write_index


@pytest.fixture
def indexed(sample_fasta):
    session = open_fasta(sample_fasta).unwrap()
    session.create_index().unwrap()
    yield session
    session.close()


@pytest.fixture
def sequential(sample_fasta):
    session = open_fasta(sample_fasta).unwrap()
    yield session
    session.close()


class TestOpenClose:
    """Tests for session lifecycle."""

    def test_open_without_index(self, sample_fasta):
        result = open_fasta(sample_fasta)
        session = result.unwrap()
        assert session.is_open
        assert not session.is_indexed
        assert session.table.is_empty()
        session.close()

    def test_open_missing_file(self, temp_dir):
        result = open_fasta(temp_dir / "absent.fa")
        assert isinstance(result.unwrap_err(), IoError)

    def test_open_with_index(self, sample_fasta, temp_dir):
        index_path = temp_dir / "sample.fa.fai"
        with open_fasta(sample_fasta).unwrap() as session:
            session.create_index(index_path).unwrap()

        with open_fasta(sample_fasta, index_path).unwrap() as session:
            assert session.is_indexed
            assert session.get_length(0).unwrap() == 60

    def test_open_with_missing_index(self, sample_fasta, temp_dir):
        result = open_fasta(sample_fasta, temp_dir / "absent.fai")
        assert isinstance(result.unwrap_err(), IoError)

    def test_malformed_index_fails_open(self, sample_fasta, temp_dir):
        index_path = temp_dir / "bad.fai"
        index_path.write_text("seq1\t60\t19\t10\n")
        result = open_fasta(sample_fasta, index_path)
        assert isinstance(result.unwrap_err(), FormatError)

    def test_empty_index_falls_back_to_sequential(self, sample_fasta, temp_dir):
        index_path = temp_dir / "empty.fai"
        index_path.write_text("")
        with open_fasta(sample_fasta, index_path).unwrap() as session:
            assert not session.is_indexed
            assert session.get_base(0, 0).is_ok()

    def test_latin1_index_name(self, sample_fasta, temp_dir):
        index_path = temp_dir / "latin1.fai"
        index_path.write_bytes(b"s\xff\t60\t19\t10\t11\n")

        result = open_fasta(sample_fasta, index_path)
        with result.unwrap() as session:
            assert session.is_indexed
            assert session.get_ref_id("s\xff").unwrap() == 0

    def test_empty_index_path_means_no_index(self, sample_fasta):
        with open_fasta(sample_fasta, "").unwrap() as session:
            assert not session.is_indexed

    def test_close_is_idempotent(self, sample_fasta):
        session = open_fasta(sample_fasta).unwrap()
        assert session.close().is_ok()
        assert session.close().is_ok()
        assert not session.is_open

    def test_context_manager_closes(self, sample_fasta):
        with open_fasta(sample_fasta).unwrap() as session:
            pass
        assert not session.is_open

    def test_queries_after_close(self, indexed):
        indexed.close()
        assert not indexed.is_indexed
        assert isinstance(indexed.get_base(0, 0).unwrap_err(), IoError)
        assert isinstance(indexed.get_sequence(0, 0, 1).unwrap_err(), IoError)
        assert isinstance(indexed.create_index().unwrap_err(), IoError)


class TestCreateIndex:
    """Tests for FastaSession.create_index."""

    def test_in_memory_only(self, sample_fasta, temp_dir):
        with open_fasta(sample_fasta).unwrap() as session:
            table = session.create_index().unwrap()
            assert session.is_indexed
            assert session.table == table
        assert list(temp_dir.glob("*.fai")) == []

    def test_persists_when_path_given(self, sample_fasta, temp_dir):
        index_path = temp_dir / "sample.fa.fai"
        with open_fasta(sample_fasta).unwrap() as session:
            session.create_index(index_path).unwrap()
        assert index_path.read_text().startswith("seq1\t60\t19\t10\t11\n")

    def test_empty_path_keeps_index_in_memory(self, sample_fasta, temp_dir):
        with open_fasta(sample_fasta).unwrap() as session:
            assert session.create_index("").is_ok()
            assert session.is_indexed
        assert sorted(p.name for p in temp_dir.iterdir()) == ["sample.fa"]

    def test_failure_leaves_table_empty(self, headerless_fasta):
        with open_fasta(headerless_fasta).unwrap() as session:
            result = session.create_index()
            assert isinstance(result.unwrap_err(), FormatError)
            assert session.table.is_empty()
            assert not session.is_indexed

    def test_failure_keeps_previous_index(self, sample_fasta, temp_dir):
        with open_fasta(sample_fasta).unwrap() as session:
            table = session.create_index().unwrap()
            unwritable = temp_dir / "sample.fa"  # a file, so it cannot be a parent dir
            result = session.create_index(unwritable / "index.fai")
            assert isinstance(result.unwrap_err(), IoError)
            assert session.table == table


class TestGetLength:
    """Tests for get_length."""

    def test_not_indexed(self, sequential):
        assert isinstance(sequential.get_length(0).unwrap_err(), NotIndexedError)

    def test_lengths(self, indexed):
        assert indexed.get_length(0).unwrap() == 60
        assert indexed.get_length(1).unwrap() == 5

    @pytest.mark.parametrize("ref_id", [-1, 2, 100])
    def test_out_of_range(self, indexed, ref_id):
        assert isinstance(indexed.get_length(ref_id).unwrap_err(), OutOfRangeError)


class TestIndexedAccess:
    """Tests for the indexed seek path."""

    def test_two_record_scenario(self, indexed, sample_sequences):
        assert indexed.get_base(0, 15).unwrap() == sample_sequences["seq1"][15]
        assert indexed.get_sequence(1, 0, 4).unwrap() == sample_sequences["seq2"]

    def test_every_base(self, indexed, sample_sequences):
        for ref_id, sequence in enumerate(sample_sequences.values()):
            bases = [indexed.get_base(ref_id, pos).unwrap() for pos in range(len(sequence))]
            assert "".join(bases) == sequence

    def test_slices(self, indexed, sample_sequences):
        seq1 = sample_sequences["seq1"]
        for start, stop in [(0, 0), (0, 59), (9, 10), (15, 44), (59, 59)]:
            region = indexed.get_sequence(0, start, stop).unwrap()
            assert region == seq1[start:stop + 1]
            assert len(region) == stop - start + 1

    def test_base_at_length_reads_adjacent_byte(self, indexed):
        """position == length is accepted and returns the byte after the last base."""
        # seq1 fills its last line, so the next byte is the '>' of seq2
        assert indexed.get_base(0, 60).unwrap() == ">"
        # seq2 ends mid-line, so the next byte is its line terminator
        assert indexed.get_base(1, 5).unwrap() == "\n"

    def test_base_past_length(self, indexed):
        assert isinstance(indexed.get_base(0, 61).unwrap_err(), OutOfRangeError)
        assert isinstance(indexed.get_base(0, -1).unwrap_err(), OutOfRangeError)
        assert isinstance(indexed.get_base(2, 0).unwrap_err(), OutOfRangeError)

    def test_sequence_stop_at_length(self, indexed, sample_sequences):
        """stop == length passes validation and yields the bases up to the end."""
        assert indexed.get_sequence(1, 2, 5).unwrap() == sample_sequences["seq2"][2:]

    @pytest.mark.parametrize("start,stop", [(-1, 3), (5, 4), (0, 61)])
    def test_invalid_range(self, indexed, start, stop):
        assert isinstance(indexed.get_sequence(0, start, stop).unwrap_err(), OutOfRangeError)

    def test_crlf(self, crlf_fasta, sample_sequences):
        with open_fasta(crlf_fasta).unwrap() as session:
            session.create_index().unwrap()
            seq1 = sample_sequences["seq1"]
            assert "".join(session.get_base(0, p).unwrap() for p in range(60)) == seq1
            assert session.get_sequence(0, 8, 33).unwrap() == seq1[8:34]
            assert session.get_sequence(1, 0, 4).unwrap() == sample_sequences["seq2"]

    def test_matches_biopython(self, multi_fasta):
        path, _ = multi_fasta
        with open_fasta(path).unwrap() as session:
            session.create_index().unwrap()
            for ref_id, record in enumerate(SeqIO.parse(path, "fasta")):
                length = session.get_length(ref_id).unwrap()
                assert length == len(record.seq)
                assert session.get_sequence(ref_id, 0, length - 1).unwrap() == str(record.seq)


class TestSequentialAccess:
    """Tests for the sequential scan fallback."""

    def test_two_record_scenario(self, sequential, sample_sequences):
        assert sequential.get_base(0, 15).unwrap() == sample_sequences["seq1"][15]
        assert sequential.get_sequence(1, 0, 4).unwrap() == sample_sequences["seq2"]

    def test_agrees_with_indexed(self, sample_fasta, multi_fasta):
        for path in [sample_fasta, multi_fasta[0]]:
            with open_fasta(path).unwrap() as scan, open_fasta(path).unwrap() as seek:
                table = seek.create_index().unwrap()
                for ref_id, entry in enumerate(table):
                    for pos in range(entry.length):
                        assert scan.get_base(ref_id, pos) == seek.get_base(ref_id, pos)
                    for start, stop in [(0, entry.length - 1), (entry.length // 2, entry.length)]:
                        assert scan.get_sequence(ref_id, start, stop) == seek.get_sequence(ref_id, start, stop)

    def test_missing_record(self, sequential):
        assert isinstance(sequential.get_base(2, 0).unwrap_err(), NotFoundError)
        assert isinstance(sequential.get_base(-1, 0).unwrap_err(), NotFoundError)

    def test_position_beyond_record(self, sequential):
        assert isinstance(sequential.get_base(1, 5).unwrap_err(), NotFoundError)
        assert isinstance(sequential.get_sequence(1, 0, 6).unwrap_err(), NotFoundError)

    def test_malformed_file(self, headerless_fasta):
        with open_fasta(headerless_fasta).unwrap() as session:
            assert isinstance(session.get_base(0, 0).unwrap_err(), FormatError)


class TestNamesAndRecords:
    """Tests for name lookup and SeqRecord fetching."""

    @pytest.mark.parametrize("mode", ["indexed", "sequential"])
    def test_ref_id_by_name(self, mode, request):
        session = request.getfixturevalue(mode)
        assert session.get_ref_id("seq2").unwrap() == 1
        assert session.get_name(0).unwrap() == "seq1"
        assert isinstance(session.get_ref_id("seq9").unwrap_err(), NotFoundError)

    def test_fetch_whole_record(self, indexed, sample_sequences):
        record = indexed.fetch_record(0).unwrap()
        assert record.id == "seq1"
        assert str(record.seq) == sample_sequences["seq1"]

    def test_fetch_region(self, indexed, sample_sequences):
        record = indexed.fetch_record(0, 10, 19).unwrap()
        assert record.id == "seq1:11-20"
        assert str(record.seq) == sample_sequences["seq1"][10:20]

    def test_fetch_region_to_record_end(self, indexed, sample_sequences):
        """A stop equal to the length labels the region with its real end."""
        record = indexed.fetch_record(1, 2, 5).unwrap()
        assert record.id == "seq2:3-5"
        assert str(record.seq) == sample_sequences["seq2"][2:]

    def test_fetch_region_sequential(self, sequential, sample_sequences):
        record = sequential.fetch_record(1, 1, 3).unwrap()
        assert str(record.seq) == sample_sequences["seq2"][1:4]

    def test_fetch_whole_record_needs_index(self, sequential):
        assert isinstance(sequential.fetch_record(0).unwrap_err(), NotIndexedError)

    def test_repr(self, indexed):
        assert "IndexedMode" in repr(indexed)
        assert isinstance(indexed, FastaSession)
