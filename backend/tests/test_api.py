import os
import unittest


class TestSeatPickerAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        # Fully free venue unless a test asks otherwise.
        os.environ["SEAT_PICKER_OCCUPANCY_RATE"] = "0"
        from backend.app.main import app

        cls.app = app

    @classmethod
    def tearDownClass(cls):
        os.environ.pop("SEAT_PICKER_OCCUPANCY_RATE", None)

    def _client(self):
        from fastapi.testclient import TestClient

        return TestClient(self.app)

    def _small(self, c, **extra):
        body = {"layout": {"rows": [{"label": "A", "seats": 5}, {"label": "B", "seats": 5}], "center_row": "B"}}
        body.update(extra)
        res = c.post("/sessions", json=body)
        self.assertEqual(res.status_code, 200, res.text)
        return res.json()

    def test_health(self):
        c = self._client()
        self.assertEqual(c.get("/health").json(), {"ok": True})

    def test_create_default_theater(self):
        c = self._client()
        s = c.post("/sessions", json={"ticket_count": 2}).json()
        self.assertEqual([r["label"] for r in s["rows"]], list("ABCDEFGH"))
        self.assertEqual(s["center_row"], "D")
        self.assertEqual(s["suggestion"], ["D1", "D2"])
        self.assertEqual(s["price"]["total"], 0)

    def test_seeded_sessions_match(self):
        c = self._client()
        a = c.post("/sessions", json={"seed": 11, "occupancy_rate": 0.3}).json()
        b = c.post("/sessions", json={"seed": 11, "occupancy_rate": 0.3}).json()
        self.assertNotEqual(a["id"], b["id"])
        self.assertEqual(a["rows"], b["rows"])

    def test_click_flow_and_pricing(self):
        c = self._client()
        s = self._small(c, occupied=["B1"], ticket_count=2)
        sid = s["id"]
        self.assertEqual(s["suggestion"], ["B2", "B3"])

        s = c.post(f"/sessions/{sid}/click", json={"seat": "A5"}).json()
        self.assertTrue(s["changed"])
        self.assertEqual(s["selection"], ["A5"])
        self.assertEqual(s["suggestion"], [])

        s = c.post(f"/sessions/{sid}/click", json={"seat": "B1"}).json()
        self.assertFalse(s["changed"])

        s = c.post(f"/sessions/{sid}/click", json={"seat": "A4"}).json()
        self.assertEqual(s["selection"], ["A5", "A4"])
        self.assertEqual(s["price"], {"seats": 2, "tickets": 10000, "service": 1500, "total": 11500})

        s = c.post(f"/sessions/{sid}/click", json={"seat": "A3"}).json()
        self.assertFalse(s["changed"])

        s = c.put(f"/sessions/{sid}/ticket-count", json={"count": 1}).json()
        self.assertEqual(s["selection"], ["A5"])
        statuses = {seat["id"]: seat["status"] for row in s["rows"] for seat in row["seats"]}
        self.assertEqual(statuses["A4"], "available")
        self.assertEqual(statuses["A5"], "selected")

    def test_use_suggested(self):
        c = self._client()
        sid = self._small(c, ticket_count=3)["id"]
        s = c.post(f"/sessions/{sid}/use-suggested").json()
        self.assertTrue(s["changed"])
        self.assertEqual(s["selection"], ["B1", "B2", "B3"])
        s = c.post(f"/sessions/{sid}/use-suggested").json()
        self.assertFalse(s["changed"])

    def test_ticket_count_clamped(self):
        c = self._client()
        sid = self._small(c)["id"]
        self.assertEqual(c.put(f"/sessions/{sid}/ticket-count", json={"count": 50}).json()["ticket_count"], 10)
        self.assertEqual(c.put(f"/sessions/{sid}/ticket-count", json={"count": "-2"}).json()["ticket_count"], 1)

    def test_invalid_layout(self):
        c = self._client()
        res = c.post("/sessions", json={"layout": {"rows": [{"label": "A", "seats": 0}], "center_row": "A"}})
        self.assertEqual(res.status_code, 400)
        res = c.post("/sessions", json={"layout": {"rows": [{"label": "A", "seats": 3}], "center_row": "Q"}})
        self.assertEqual(res.status_code, 400)

    def test_oversized_layout_rejected(self):
        from backend.app.schemas import MAX_ROWS, MAX_SEATS_PER_ROW

        c = self._client()
        res = c.post(
            "/sessions",
            json={"layout": {"rows": [{"label": "A", "seats": 300000}], "center_row": "A"}},
        )
        self.assertEqual(res.status_code, 422)

        rows = [{"label": f"R{i}", "seats": 1} for i in range(MAX_ROWS + 1)]
        res = c.post("/sessions", json={"layout": {"rows": rows, "center_row": "R0"}})
        self.assertEqual(res.status_code, 422)

        res = c.post("/sessions", json={"layout": {"rows": [{"label": "A" * 50, "seats": 3}], "center_row": "A"}})
        self.assertEqual(res.status_code, 422)

        # the limits themselves are accepted
        res = c.post(
            "/sessions",
            json={"layout": {"rows": [{"label": "A", "seats": MAX_SEATS_PER_ROW}], "center_row": "A"}},
        )
        self.assertEqual(res.status_code, 200)

    def test_missing_and_deleted_session(self):
        c = self._client()
        self.assertEqual(c.get("/sessions/nope").status_code, 404)
        sid = self._small(c)["id"]
        self.assertEqual(c.delete(f"/sessions/{sid}").json(), {"deleted": True})
        self.assertEqual(c.get(f"/sessions/{sid}").status_code, 404)
        self.assertEqual(c.post(f"/sessions/{sid}/click", json={"seat": "A1"}).status_code, 404)

    def test_store_evicts_oldest(self):
        from backend.app.store import SessionStore
        from seat_picker.session import SeatSession

        st = SessionStore(max_sessions=2)
        first = st.add(SeatSession())
        st.add(SeatSession())
        st.add(SeatSession())
        self.assertEqual(len(st), 2)
        self.assertIsNone(st.get(first))


if __name__ == "__main__":
    unittest.main()
