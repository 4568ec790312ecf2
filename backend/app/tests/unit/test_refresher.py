from unittest.mock import MagicMock, patch

import requests

import refresher


class TestRefresher:
    """Tests for the daily stats refresher loop body."""

    def setup_method(self) -> None:
        self.response = MagicMock()
        self.response.status_code = 200
        self.response.json.return_value = {
            "date": "2026-10-19",
            "total_calls": 4,
            "total_wins": 1,
        }

    @patch("refresher.requests.post")
    def test_update_daily_stats_posts_to_backend(self, mock_post) -> None:
        mock_post.return_value = self.response

        refresher.update_daily_stats("2026-10-18")

        url = mock_post.call_args.args[0]
        assert url.endswith("/api/admin/update-daily-stats")
        assert mock_post.call_args.kwargs["params"] == {"date": "2026-10-18"}

    @patch("refresher.requests.post")
    def test_today_is_default(self, mock_post) -> None:
        mock_post.return_value = self.response

        refresher.update_daily_stats()

        assert mock_post.call_args.kwargs["params"] is None

    @patch("refresher.requests.post")
    def test_refresh_once_success(self, mock_post) -> None:
        mock_post.return_value = self.response

        assert refresher.refresh_once() is True

    @patch("refresher.requests.post")
    def test_refresh_once_rejected(self, mock_post) -> None:
        self.response.status_code = 500
        mock_post.return_value = self.response

        assert refresher.refresh_once() is False
        self.response.json.assert_not_called()

    @patch("refresher.requests.post")
    def test_refresh_once_backend_down(self, mock_post) -> None:
        mock_post.side_effect = requests.ConnectionError("refused")

        assert refresher.refresh_once() is False
