class TestInfoEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert len(response.json()["algorithms"]) == 8

    def test_algorithms(self, client):
        names = {a["name"] for a in client.get("/algorithms").json()}
        assert names == {"caesar", "mono", "poly", "rail", "hill", "playfair", "otp", "rowcol"}


class TestProcess:

    def test_success_is_recorded(self, client, history):
        response = client.post("/process", json={
            "algorithm": "caesar", "mode": "encode", "text": "HAL", "key": 1,
        })
        assert response.status_code == 200
        assert response.json() == {"ok": True, "output": "IBM", "error": None}
        assert len(history) == 1

    def test_failure_is_data_not_http_error(self, client, history):
        response = client.post("/process", json={
            "algorithm": "hill", "mode": "decode", "text": "HELP", "key": [2, 4, 4, 8],
        })
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["kind"] == "NonInvertibleMatrix"
        assert len(history) == 0

    def test_unknown_algorithm_rejected_by_schema(self, client):
        response = client.post("/process", json={
            "algorithm": "enigma", "mode": "encode", "text": "HAL", "key": 1,
        })
        assert response.status_code == 422


class TestEncodeDecode:

    def test_encode_then_decode(self, client):
        encoded = client.post("/encode", json={"algorithm": "poly", "text": "HELLO", "key": "KEY"})
        assert encoded.json() == {"output": "RIJVS"}
        decoded = client.post("/decode", json={"algorithm": "poly", "text": "RIJVS", "key": "KEY"})
        assert decoded.json() == {"output": "HELLO"}

    def test_cipher_error_is_400(self, client):
        response = client.post("/decode", json={"algorithm": "otp", "text": "HELLO", "key": "ABC"})
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "LengthMismatch"

    def test_xor_surrogate_is_400(self, client):
        response = client.post("/encode", json={"algorithm": "otp", "text": "\u9800", "key": "\u4000"})
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "InvalidParameter"


class TestProcessFile:

    def test_returns_attachment(self, client, history):
        response = client.post(
            "/process-file",
            files={"file": ("msg.txt", b"HELLO", "text/plain")},
            data={"algorithm": "caesar", "mode": "encode", "key": "3"},
        )
        assert response.status_code == 200
        assert response.text == "KHOOR"
        assert "caesar-encode-output.txt" in response.headers["content-disposition"]
        assert history.entries()[0].output == "KHOOR"

    def test_hill_key_from_form(self, client):
        response = client.post(
            "/process-file",
            files={"file": ("msg.txt", b"DPLE", "text/plain")},
            data={"algorithm": "hill", "mode": "decode", "key": "3,3,2,5"},
        )
        assert response.text == "HELP"

    def test_invalid_key(self, client):
        response = client.post(
            "/process-file",
            files={"file": ("msg.txt", b"HELLO", "text/plain")},
            data={"algorithm": "caesar", "mode": "encode", "key": "30"},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "InvalidParameter"

    def test_non_utf8_file(self, client):
        response = client.post(
            "/process-file",
            files={"file": ("blob.bin", b"\xff\xfe\xfa", "application/octet-stream")},
            data={"algorithm": "caesar", "mode": "encode", "key": "3"},
        )
        assert response.status_code == 400


class TestRandomKey:

    def test_mono(self, client):
        body = client.get("/random-key/mono").json()
        assert body["algorithm"] == "mono"
        assert len(body["key"]) == 26

    def test_hill_key_is_usable(self, client):
        key = client.get("/random-key/hill").json()["key"]
        response = client.post("/process", json={
            "algorithm": "hill", "mode": "encode", "text": "HELP", "key": key,
        })
        assert response.json()["ok"] is True

    def test_otp_needs_length(self, client):
        assert client.get("/random-key/otp").status_code == 400
        body = client.get("/random-key/otp", params={"length": 5}).json()
        assert len(body["key"]) == 5

    def test_zero_keyword_length(self, client):
        assert client.get("/random-key/poly", params={"length": 0}).status_code == 400

    def test_unknown_algorithm(self, client):
        assert client.get("/random-key/enigma").status_code == 422


class TestHistoryEndpoints:

    def _run(self, client, text):
        client.post("/encode", json={"algorithm": "caesar", "text": text, "key": 1})

    def test_list_and_clear(self, client):
        self._run(client, "HAL")
        self._run(client, "ABC")
        entries = client.get("/history").json()
        assert [e["input"] for e in entries] == ["ABC", "HAL"]
        assert client.delete("/history").json() == {"cleared": 2}
        assert client.get("/history").json() == []

    def test_text_export(self, client):
        self._run(client, "HAL")
        response = client.get("/history/export")
        assert response.status_code == 200
        assert "encryption_history.txt" in response.headers["content-disposition"]
        assert "Operation: encode (caesar)" in response.text

    def test_excel_export(self, client):
        self._run(client, "HAL")
        response = client.get("/history/export-excel")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert response.content[:2] == b"PK"
