import pytest

from app.worker.partitioner import chunk_size, partition


class TestChunkSize:
    def test_targets_seven_workers_for_large_inputs(self) -> None:
        assert chunk_size(70) == 10

    def test_never_below_two(self) -> None:
        assert chunk_size(10) == 2

    def test_never_reaches_total(self) -> None:
        assert chunk_size(3) == 2

    def test_small_lists_stay_whole(self) -> None:
        assert chunk_size(0) == 0
        assert chunk_size(1) == 1
        assert chunk_size(2) == 2

    def test_custom_target_workers(self) -> None:
        assert chunk_size(100, target_workers=4) == 25

    def test_rejects_non_positive_target(self) -> None:
        with pytest.raises(ValueError, match="target_workers"):
            chunk_size(10, target_workers=0)


class TestPartition:
    def test_empty_input_gives_no_chunks(self) -> None:
        assert partition([]) == []

    def test_single_record_gives_single_chunk(self) -> None:
        assert partition(["a"]) == [["a"]]

    def test_two_records_are_not_divided(self) -> None:
        assert partition(["a", "b"]) == [["a", "b"]]

    def test_three_records_form_two_chunks(self) -> None:
        assert partition(["a", "b", "c"]) == [["a", "b"], ["c"]]

    def test_last_chunk_may_be_shorter(self) -> None:
        chunks = partition(list(range(23)))
        assert [len(c) for c in chunks] == [3, 3, 3, 3, 3, 3, 3, 2]

    @pytest.mark.parametrize("total", [2, 3, 4, 5, 13, 14, 15, 49, 50, 101, 1000])
    def test_chunks_cover_input_in_order(self, total: int) -> None:
        records = list(range(total))

        chunks = partition(records)

        assert [r for chunk in chunks for r in chunk] == records
        assert all(len(chunk) >= 2 for chunk in chunks[:-1])

    @pytest.mark.parametrize("total", [3, 4, 10, 100])
    def test_more_than_one_chunk_when_divisible(self, total: int) -> None:
        assert len(partition(list(range(total)))) >= 2

    def test_chunks_are_independent_lists(self) -> None:
        records = ("a", "b", "c", "d")

        chunks = partition(records)

        assert all(isinstance(chunk, list) for chunk in chunks)
