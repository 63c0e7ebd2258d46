#!/usr/bin/env python3
"""Tests for Bucket enum."""

from fleetops import Bucket


class TestBucket:
    """Tests for Bucket ordering and labels."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Bucket.EXPIRED.value < Bucket.WITHIN_30.value
        assert Bucket.WITHIN_30.value < Bucket.WITHIN_60.value
        assert Bucket.WITHIN_60.value < Bucket.WITHIN_90.value

    def test_iteration_order_is_urgency_order(self):
        assert list(Bucket) == [
            Bucket.EXPIRED,
            Bucket.WITHIN_30,
            Bucket.WITHIN_60,
            Bucket.WITHIN_90,
        ]

    def test_titles(self):
        assert Bucket.EXPIRED.title == "Laudos Vencidos"
        assert Bucket.WITHIN_30.title == "Vencer em até 30 dias"
        assert Bucket.WITHIN_90.title == "Vencer em até 90 dias"

    def test_badges(self):
        assert Bucket.EXPIRED.badge == "Vencido"
        assert Bucket.WITHIN_30.badge == "Crítico"
        assert Bucket.WITHIN_60.badge == "Atenção"
        assert Bucket.WITHIN_90.badge == "Em breve"
