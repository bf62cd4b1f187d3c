from docintel.summarization.text_store import TemporaryTextStore


class TestTemporaryTextStore:
    def test_put_returns_servable_url(self) -> None:
        store = TemporaryTextStore("http://localhost:5678/")
        url = store.put("hello", prefix="apyhub")

        assert url.startswith("http://localhost:5678/api/temp-files/apyhub_")
        file_id = url.rsplit("/", 1)[1]
        stored = store.get(file_id)
        assert stored is not None
        assert stored.content == b"hello"
        assert stored.mime_type == "text/plain"

    def test_ids_are_unique(self) -> None:
        store = TemporaryTextStore("http://host")
        urls = {store.put("same") for _ in range(20)}
        assert len(urls) == 20
        assert len(store) == 20

    def test_delete(self) -> None:
        store = TemporaryTextStore("http://host", path_prefix="files")
        url = store.put("x")
        file_id = url.rsplit("/", 1)[1]
        assert url == f"http://host/files/{file_id}"
        store.delete(file_id)
        assert store.get(file_id) is None
        store.delete(file_id)

    def test_unknown_id(self) -> None:
        assert TemporaryTextStore("http://host").get("missing") is None

    def test_release_by_url(self) -> None:
        store = TemporaryTextStore("http://host/")
        url = store.put("x", prefix="apyhub")
        store.release("http://elsewhere/api/temp-files/other")
        assert len(store) == 1
        store.release(url)
        assert len(store) == 0
