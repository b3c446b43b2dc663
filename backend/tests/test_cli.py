from designtaste.client.cli import build_parser, main
from designtaste.client.local_queue import LocalProcessingQueue, QueueStorage


def _seed(path, **kwargs):
    queue = LocalProcessingQueue(QueueStorage(path))
    return queue.enqueue({"tagName": "BUTTON"}, "s", "https://example.com", **kwargs)


def test_list_empty(tmp_path, capsys):
    assert main(["--queue-file", str(tmp_path / "q.json"), "list"]) == 0
    assert capsys.readouterr().out.strip() == "Queue is empty"


def test_list_items(tmp_path, capsys):
    path = tmp_path / "q.json"
    element_id = _seed(path, priority=3)
    assert main(["--queue-file", str(path), "list"]) == 0
    out = capsys.readouterr().out
    assert element_id in out
    assert "queued" in out
    assert "p3" in out
    assert "button" in out


def test_clear(tmp_path, capsys):
    path = tmp_path / "q.json"
    _seed(path)
    assert main(["--queue-file", str(path), "clear"]) == 0
    assert QueueStorage(path).load() == []


def test_drain_empty_queue(tmp_path, capsys):
    assert main(["--queue-file", str(tmp_path / "q.json"), "drain"]) == 0


def test_capture_arguments():
    args = build_parser().parse_args(["capture", "https://example.com", "nav a", "--prompt", "cleaner"])
    assert args.selector == "nav a"
    assert args.prompt == "cleaner"
    assert args.priority == 1
    assert args.drain is False
