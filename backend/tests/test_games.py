"""
Tests for the game catalog: games, categories, question rows, questions.
"""


class TestGames:
    """Game CRUD."""

    def test_create_with_template(self, client, make_user):
        """useTemplate seeds 5 categories x 5 rows of empty questions."""
        host = make_user("Host")
        response = client.post("/api/games", json={"title": "Templated", "useTemplate": True}, headers=host.headers)
        assert response.status_code == 201
        game = response.json()

        assert [c["name"] for c in game["categories"]] == [f"Category {i}" for i in range(1, 6)]
        assert [r["value"] for r in game["questionRows"]] == [100, 200, 300, 400, 500]
        assert all(len(c["questions"]) == 5 for c in game["categories"])
        assert game["creatorId"] == host.id
        assert game["creator"]["name"] == "Host"

    def test_create_plain_game_is_empty(self, client, make_user):
        host = make_user("Host")
        game = client.post("/api/games", json={"title": "Plain"}, headers=host.headers).json()
        assert game["categories"] == []
        assert game["questionRows"] == []
        assert game["isActive"] is True

    def test_list_and_get(self, client, make_user, build_game):
        host = make_user("Host")
        game_id, _ = build_game(host)

        listed = client.get("/api/games", headers=host.headers).json()
        assert [g["id"] for g in listed] == [game_id]

        detail = client.get(f"/api/games/{game_id}", headers=host.headers).json()
        assert len(detail["categories"]) == 2
        assert client.get("/api/games/999", headers=host.headers).status_code == 404

    def test_only_creator_or_admin_can_update(self, client, make_user, build_game):
        host, other, admin = make_user("Host"), make_user("Other"), make_user("Admin", admin=True)
        game_id, _ = build_game(host)

        denied = client.put(f"/api/games/{game_id}", json={"title": "Hijacked"}, headers=other.headers)
        assert denied.status_code == 403

        response = client.put(f"/api/games/{game_id}", json={"isActive": False}, headers=admin.headers)
        assert response.status_code == 200
        assert response.json()["isActive"] is False

    def test_delete_cascades(self, client, make_user, build_game):
        host = make_user("Host")
        game_id, cells = build_game(host)
        session = client.post("/api/game-sessions", json={"gameId": game_id, "name": "s"}, headers=host.headers).json()

        assert client.delete(f"/api/games/{game_id}", headers=host.headers).status_code == 200
        assert client.get(f"/api/games/{game_id}", headers=host.headers).status_code == 404
        assert client.get(f"/api/questions/{cells[(0, 0)]}", headers=host.headers).status_code == 404
        assert client.get(f"/api/game-sessions/{session['id']}", headers=host.headers).status_code == 404


class TestCategories:

    def test_ordered_listing(self, client, make_user):
        host = make_user("Host")
        game_id = client.post("/api/games", json={"title": "G"}, headers=host.headers).json()["id"]
        for name, order in (("Second", 1), ("First", 0)):
            client.post("/api/categories", json={"gameId": game_id, "name": name, "order": order}, headers=host.headers)

        names = [c["name"] for c in client.get(f"/api/categories/game/{game_id}", headers=host.headers).json()]
        assert names == ["First", "Second"]

    def test_duplicate_order_is_400(self, client, make_user):
        host = make_user("Host")
        game_id = client.post("/api/games", json={"title": "G"}, headers=host.headers).json()["id"]
        client.post("/api/categories", json={"gameId": game_id, "name": "A", "order": 0}, headers=host.headers)

        response = client.post("/api/categories", json={"gameId": game_id, "name": "B", "order": 0}, headers=host.headers)
        assert response.status_code == 400

    def test_update_into_taken_order_is_400(self, client, make_user):
        host = make_user("Host")
        game_id = client.post("/api/games", json={"title": "G"}, headers=host.headers).json()["id"]
        client.post("/api/categories", json={"gameId": game_id, "name": "A", "order": 0}, headers=host.headers)
        b = client.post("/api/categories", json={"gameId": game_id, "name": "B", "order": 1}, headers=host.headers).json()

        response = client.put(f"/api/categories/{b['id']}", json={"order": 0}, headers=host.headers)
        assert response.status_code == 400
        renamed = client.put(f"/api/categories/{b['id']}", json={"name": "Bee"}, headers=host.headers)
        assert renamed.json()["name"] == "Bee"

    def test_non_owner_cannot_add(self, client, make_user):
        host, other = make_user("Host"), make_user("Other")
        game_id = client.post("/api/games", json={"title": "G"}, headers=host.headers).json()["id"]
        response = client.post("/api/categories", json={"gameId": game_id, "name": "A", "order": 0}, headers=other.headers)
        assert response.status_code == 403

    def test_delete_removes_questions(self, client, make_user, build_game):
        host = make_user("Host")
        game_id, cells = build_game(host)
        category_id = client.get(f"/api/categories/game/{game_id}", headers=host.headers).json()[0]["id"]

        assert client.delete(f"/api/categories/{category_id}", headers=host.headers).status_code == 200
        remaining = client.get(f"/api/questions/game/{game_id}", headers=host.headers).json()
        assert {q["id"] for q in remaining} == {cells[(1, 0)], cells[(1, 1)]}


class TestQuestions:

    def test_cell_can_only_be_filled_once(self, client, make_user, build_game):
        host = make_user("Host")
        game_id, cells = build_game(host, categories=1, rows=1)
        question = client.get(f"/api/questions/{cells[(0, 0)]}", headers=host.headers).json()

        response = client.post(
            "/api/questions",
            json={"categoryId": question["categoryId"], "rowId": question["rowId"], "question": "q", "answer": "a"},
            headers=host.headers,
        )
        assert response.status_code == 400

    def test_row_from_other_game_is_400(self, client, make_user, build_game):
        host = make_user("Host")
        game_a, _ = build_game(host, categories=1, rows=1)
        game_b = client.post("/api/games", json={"title": "B"}, headers=host.headers).json()["id"]
        foreign_row = client.post(
            "/api/questions/rows", json={"gameId": game_b, "value": 100, "order": 0}, headers=host.headers
        ).json()
        category_id = client.get(f"/api/categories/game/{game_a}", headers=host.headers).json()[0]["id"]

        response = client.post(
            "/api/questions",
            json={"categoryId": category_id, "rowId": foreign_row["id"], "question": "q", "answer": "a"},
            headers=host.headers,
        )
        assert response.status_code == 400

    def test_value_comes_from_row(self, client, make_user, build_game):
        host = make_user("Host")
        _, cells = build_game(host, categories=1, rows=3)
        values = [client.get(f"/api/questions/{cells[(0, r)]}", headers=host.headers).json()["value"] for r in range(3)]
        assert values == [100, 200, 300]

    def test_update_and_delete(self, client, make_user, build_game):
        host, other = make_user("Host"), make_user("Other")
        _, cells = build_game(host, categories=1, rows=1)
        qid = cells[(0, 0)]

        assert client.put(f"/api/questions/{qid}", json={"answer": "x"}, headers=other.headers).status_code == 403
        updated = client.put(f"/api/questions/{qid}", json={"answer": "Paris"}, headers=host.headers).json()
        assert updated["answer"] == "Paris"

        assert client.delete(f"/api/questions/{qid}", headers=host.headers).status_code == 200
        assert client.get(f"/api/questions/{qid}", headers=host.headers).status_code == 404

    def test_rows(self, client, make_user):
        host = make_user("Host")
        game_id = client.post("/api/games", json={"title": "G"}, headers=host.headers).json()["id"]
        client.post("/api/questions/rows", json={"gameId": game_id, "value": 200, "order": 1}, headers=host.headers)
        first = client.post("/api/questions/rows", json={"gameId": game_id, "value": 100, "order": 0}, headers=host.headers)
        clash = client.post("/api/questions/rows", json={"gameId": game_id, "value": 300, "order": 0}, headers=host.headers)
        assert clash.status_code == 400

        rows = client.get(f"/api/questions/rows/game/{game_id}", headers=host.headers).json()
        assert [r["value"] for r in rows] == [100, 200]

        assert client.delete(f"/api/questions/rows/{first.json()['id']}", headers=host.headers).status_code == 200
        rows = client.get(f"/api/questions/rows/game/{game_id}", headers=host.headers).json()
        assert [r["value"] for r in rows] == [200]


class TestSessionBoardsPinQuestions:
    """Questions on a session board stay until the session goes."""

    def setup_board(self, client, make_user, build_game):
        host = make_user("Host")
        game_id, cells = build_game(host)
        session = client.post("/api/game-sessions", json={"gameId": game_id, "name": "s"}, headers=host.headers).json()
        return host, cells, session["id"]

    def board_size(self, client, host, session_id):
        detail = client.get(f"/api/game-sessions/{session_id}", headers=host.headers).json()
        return len(detail["questions"])

    def test_question_in_use_cannot_be_deleted(self, client, make_user, build_game):
        host, cells, session_id = self.setup_board(client, make_user, build_game)

        response = client.delete(f"/api/questions/{cells[(0, 0)]}", headers=host.headers)
        assert response.status_code == 409
        assert response.json()["detail"] == "Question is used by a game session"
        assert self.board_size(client, host, session_id) == 4
        assert client.get(f"/api/questions/{cells[(0, 0)]}", headers=host.headers).status_code == 200

    def test_category_and_row_in_use_cannot_be_deleted(self, client, make_user, build_game):
        host, cells, session_id = self.setup_board(client, make_user, build_game)
        question = client.get(f"/api/questions/{cells[(1, 1)]}", headers=host.headers).json()

        category = client.delete(f"/api/categories/{question['categoryId']}", headers=host.headers)
        row = client.delete(f"/api/questions/rows/{question['rowId']}", headers=host.headers)
        assert category.status_code == 409
        assert row.status_code == 409
        assert self.board_size(client, host, session_id) == 4

    def test_deleting_the_session_releases_its_questions(self, client, make_user, build_game):
        host, cells, session_id = self.setup_board(client, make_user, build_game)

        assert client.delete(f"/api/game-sessions/{session_id}", headers=host.headers).status_code == 200
        assert client.delete(f"/api/questions/{cells[(0, 0)]}", headers=host.headers).status_code == 200
