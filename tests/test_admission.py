"""Tests for parameter admission.

Covers the admission subpackage:

1. **PatternSet** -- compilation, anchored case-insensitive matching,
   caching, invalid patterns.
2. **AdmissionPolicy / PolicyHolder** -- compilation from config, standard
   patterns, atomic replacement.
3. **NameAdmission** -- DMI guard, length limit, excluded/accepted
   patterns, target veto, annotation hook, logging.
4. **ValueAdmission** -- empty values, excluded/accepted patterns, veto.
5. **OrderingPolicy** -- depth, comparator, stability.
6. **AdmissionPipeline** -- filtering, ordering, purity.
"""
from __future__ import annotations

import logging
import threading

import pytest

from paramgate.admission import (
    DMI_IGNORED_PATTERN,
    STANDARD_ACCEPTED_NAME_PATTERNS,
    STANDARD_EXCLUDED_NAME_PATTERNS,
    AdmissionPipeline,
    AdmissionPolicy,
    NameAdmission,
    OrderingPolicy,
    PatternSet,
    PolicyHolder,
    ValueAdmission,
    depth,
    depth_key,
    is_configured,
)
from paramgate.core.config import GateConfig
from paramgate.core.errors import ConfigurationError, InvalidPattern
from paramgate.core.interfaces import InMemoryBindingTarget
from paramgate.core.types import Parameter, ParameterCollection, RejectionReason

# ===================================================================
# Fixtures and helpers
# ===================================================================


def _names(**config: object) -> NameAdmission:
    return NameAdmission(AdmissionPolicy.from_config(GateConfig(**config)))


def _values(**config: object) -> ValueAdmission:
    return ValueAdmission(AdmissionPolicy.from_config(GateConfig(**config)))


class VetoingTarget:
    """Target implementing both veto capabilities."""

    def __init__(self) -> None:
        self.name_checks: list[str] = []
        self.value_checks: list[str | None] = []

    def acceptable_parameter_name(self, name: str) -> bool:
        self.name_checks.append(name)
        return name != "blocked"

    def acceptable_parameter_value(self, value: str | None) -> bool:
        self.value_checks.append(value)
        return value != "forbidden"

    def try_set(self, name: str, value: object) -> None:
        raise AssertionError("admission must never bind")


@pytest.fixture
def vetoing_target() -> VetoingTarget:
    return VetoingTarget()


# ===================================================================
# Test: PatternSet
# ===================================================================


class TestPatternSet:
    """Tests for compiled pattern sets."""

    def test_compile_comma_delimited(self) -> None:
        ps = PatternSet.compile(r"user\..*, id ")
        assert ps.patterns == (r"user\..*", "id")
        assert len(ps) == 2

    def test_case_insensitive(self) -> None:
        ps = PatternSet.compile(r"user\..*")
        assert ps.matches("USER.Name")

    def test_match_is_anchored(self) -> None:
        ps = PatternSet.compile("foo")
        assert ps.matches("foo")
        assert not ps.matches("foobar")
        assert not ps.matches("xfoo")

    def test_first_match_returns_rule_text(self) -> None:
        ps = PatternSet.compile("a.*, b.*")
        assert ps.first_match("bee") == "b.*"
        assert ps.first_match("cat") is None

    def test_duplicates_dropped(self) -> None:
        assert PatternSet.compile("a, a, b").patterns == ("a", "b")

    @pytest.mark.parametrize("text", [None, "", "  ,  "])
    def test_empty(self, text: str | None) -> None:
        ps = PatternSet.compile(text)
        assert not ps
        assert not ps.matches("anything")
        assert not is_configured(ps)

    def test_is_configured(self) -> None:
        assert not is_configured(None)
        assert is_configured(PatternSet.compile("x"))

    def test_from_patterns_allows_commas(self) -> None:
        ps = PatternSet.from_patterns([r"a{1,3}"])
        assert ps.matches("aaa")
        assert not ps.matches("aaaa")

    def test_invalid_pattern_raises(self) -> None:
        with pytest.raises(InvalidPattern) as exc_info:
            PatternSet.compile("ok, [broken")
        assert exc_info.value.details["pattern"] == "[broken"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_equality_and_hash(self) -> None:
        assert PatternSet.compile("a,b") == PatternSet.from_patterns(["a", "b"])
        assert hash(PatternSet.compile("a")) == hash(PatternSet.compile("a"))
        assert PatternSet.compile("a") != PatternSet.compile("b")

    def test_describe(self) -> None:
        assert PatternSet.compile("a, b").describe() == "a, b"

    def test_compilation_caching(self) -> None:
        PatternSet.clear_cache()
        PatternSet.compile(r"cached\d+")
        info1 = PatternSet.cache_info()
        PatternSet.compile(r"cached\d+")
        info2 = PatternSet.cache_info()
        assert info2.hits > info1.hits


# ===================================================================
# Test: AdmissionPolicy and PolicyHolder
# ===================================================================


class TestAdmissionPolicy:
    """Tests for policy snapshots."""

    def test_nothing_configured(self) -> None:
        policy = AdmissionPolicy.from_config(GateConfig())
        assert policy.accepted_names is None
        assert policy.excluded_names is None
        assert policy.accepted_values is None
        assert policy.excluded_values is None

    def test_compiles_all_four_sets(self) -> None:
        policy = AdmissionPolicy.from_config(
            GateConfig(
                accepted_param_names="a.*",
                excluded_params="b.*",
                accepted_value_patterns="c.*",
                excluded_value_patterns="d.*",
            )
        )
        assert policy.accepted_names == PatternSet.compile("a.*")
        assert policy.excluded_names == PatternSet.compile("b.*")
        assert policy.accepted_values == PatternSet.compile("c.*")
        assert policy.excluded_values == PatternSet.compile("d.*")

    def test_invalid_pattern_fails_fast(self) -> None:
        with pytest.raises(InvalidPattern):
            AdmissionPolicy.from_config(GateConfig(excluded_value_patterns="(unclosed"))

    def test_standard_patterns(self) -> None:
        policy = AdmissionPolicy.from_config(GateConfig(standard_patterns=True))
        assert policy.accepted_names is not None
        assert policy.accepted_names.patterns == STANDARD_ACCEPTED_NAME_PATTERNS
        assert policy.excluded_names is not None
        assert policy.excluded_names.patterns == STANDARD_EXCLUDED_NAME_PATTERNS

    def test_explicit_patterns_override_standard(self) -> None:
        policy = AdmissionPolicy.from_config(
            GateConfig(standard_patterns=True, excluded_params="x")
        )
        assert policy.excluded_names == PatternSet.compile("x")
        assert policy.accepted_names is not None
        assert policy.accepted_names.patterns == STANDARD_ACCEPTED_NAME_PATTERNS


class TestPolicyHolder:
    """Tests for atomic policy publication."""

    def test_reload_swaps_policy(self) -> None:
        holder = PolicyHolder(AdmissionPolicy.from_config(GateConfig()))
        new = holder.reload(GateConfig(ordered=True))
        assert holder.current is new
        assert holder.current.config.ordered

    def test_failed_reload_keeps_current(self) -> None:
        original = AdmissionPolicy.from_config(GateConfig(excluded_params="a"))
        holder = PolicyHolder(original)
        with pytest.raises(InvalidPattern):
            holder.reload(GateConfig(excluded_params="[bad"))
        assert holder.current is original

    def test_set_patterns_updates_set_and_config(self) -> None:
        holder = PolicyHolder(AdmissionPolicy.from_config(GateConfig()))
        before = holder.current
        holder.set_patterns("excluded_values", ".*<script>.*")
        after = holder.current
        assert after is not before
        assert before.excluded_values is None
        assert after.excluded_values == PatternSet.compile(".*<script>.*")
        assert after.config.excluded_value_patterns == ".*<script>.*"

    def test_set_patterns_none_removes_set(self) -> None:
        holder = PolicyHolder(AdmissionPolicy.from_config(GateConfig(excluded_params="a")))
        holder.set_patterns("excluded_names", None)
        assert holder.current.excluded_names is None
        assert holder.current.config.excluded_params is None

    @pytest.mark.parametrize("attribute", ["accepted_names", "excluded_names"])
    def test_set_patterns_none_falls_back_to_standard(self, attribute: str) -> None:
        config = GateConfig(
            standard_patterns=True, accepted_param_names="a", excluded_params="b"
        )
        holder = PolicyHolder(AdmissionPolicy.from_config(config))
        returned = holder.set_patterns(attribute, None)
        rebuilt = AdmissionPolicy.from_config(holder.current.config)
        assert returned == getattr(rebuilt, attribute)
        assert holder.current == rebuilt

    def test_set_patterns_none_leaves_value_sets_empty(self) -> None:
        config = GateConfig(standard_patterns=True, excluded_value_patterns="x")
        holder = PolicyHolder(AdmissionPolicy.from_config(config))
        assert holder.set_patterns("excluded_values", None) is None

    def test_set_patterns_unknown_attribute(self) -> None:
        holder = PolicyHolder(AdmissionPolicy.from_config(GateConfig()))
        with pytest.raises(KeyError):
            holder.set_patterns("config", "x")

    def test_set_patterns_invalid_keeps_current(self) -> None:
        original = AdmissionPolicy.from_config(GateConfig(accepted_value_patterns="a"))
        holder = PolicyHolder(original)
        with pytest.raises(InvalidPattern):
            holder.set_patterns("accepted_values", "(")
        assert holder.current is original

    def test_replacing_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        holder = PolicyHolder(AdmissionPolicy.from_config(GateConfig(excluded_params="old")))
        with caplog.at_level(logging.DEBUG, logger="paramgate"):
            holder.set_patterns("excluded_names", "new")
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "old" in warnings[0].getMessage()
        assert "new" in warnings[0].getMessage()

    def test_first_assignment_logs_debug_only(self, caplog: pytest.LogCaptureFixture) -> None:
        holder = PolicyHolder(AdmissionPolicy.from_config(GateConfig()))
        with caplog.at_level(logging.DEBUG, logger="paramgate"):
            holder.set_patterns("accepted_values", "x")
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_readers_never_see_partial_policy(self) -> None:
        """Concurrent readers always observe a complete snapshot."""
        config_a = GateConfig(excluded_params="a", excluded_value_patterns="a")
        config_b = GateConfig(excluded_params="b", excluded_value_patterns="b")
        holder = PolicyHolder(AdmissionPolicy.from_config(config_a))
        stop = threading.Event()
        mismatches: list[tuple[object, object]] = []

        def _reader() -> None:
            while not stop.is_set():
                policy = holder.current
                if policy.excluded_names != policy.excluded_values:
                    mismatches.append((policy.excluded_names, policy.excluded_values))

        readers = [threading.Thread(target=_reader) for _ in range(4)]
        for t in readers:
            t.start()
        for i in range(200):
            holder.reload(config_b if i % 2 else config_a)
        stop.set()
        for t in readers:
            t.join()
        assert mismatches == []


# ===================================================================
# Test: NameAdmission
# ===================================================================


class TestNameAdmissionDMI:
    """Reserved control tokens under dynamic method invocation."""

    @pytest.mark.parametrize("name", ["method:delete", "action:save", "METHOD:x", "Action:"])
    def test_reserved_names_rejected_when_enabled(self, name: str) -> None:
        result = _names(dmi_enabled=True).is_acceptable_name(name)
        assert not result
        assert result.reason is RejectionReason.DMI_RESERVED
        assert result.offending_pattern == DMI_IGNORED_PATTERN.pattern

    def test_reserved_names_allowed_when_disabled(self) -> None:
        assert _names(dmi_enabled=False).is_acceptable_name("method:delete")

    def test_dmi_beats_allow_list(self) -> None:
        result = _names(dmi_enabled=True, accepted_param_names=".*").is_acceptable_name(
            "method:delete"
        )
        assert result.reason is RejectionReason.DMI_RESERVED

    def test_dmi_checked_before_length(self) -> None:
        result = _names(dmi_enabled=True).is_acceptable_name("method:" + "a" * 200)
        assert result.reason is RejectionReason.DMI_RESERVED

    def test_prefix_only(self) -> None:
        assert _names(dmi_enabled=True).is_acceptable_name("my.method:x")

    def test_is_ignored_dmi(self) -> None:
        assert _names(dmi_enabled=True).is_ignored_dmi("action:x")
        assert not _names(dmi_enabled=False).is_ignored_dmi("action:x")


class TestNameAdmissionLength:
    """Name length limit."""

    def test_at_limit_accepted(self) -> None:
        assert _names().is_acceptable_name("a" * 100)

    def test_over_limit_rejected(self) -> None:
        result = _names().is_acceptable_name("a" * 101)
        assert result.reason is RejectionReason.NAME_TOO_LONG

    def test_custom_limit(self) -> None:
        names = _names(param_name_max_length=5)
        assert names.is_acceptable_name("abcde")
        assert not names.is_acceptable_name("abcdef")

    def test_length_beats_allow_list(self) -> None:
        result = _names(accepted_param_names="a+").is_acceptable_name("a" * 150)
        assert result.reason is RejectionReason.NAME_TOO_LONG

    @pytest.mark.parametrize("dev_mode", [False, True])
    def test_over_limit_warns_in_both_modes(
        self, dev_mode: bool, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="paramgate"):
            _names(dev_mode=dev_mode).is_acceptable_name("a" * 101)
        assert any(
            r.levelno == logging.WARNING and "too long" in r.getMessage()
            for r in caplog.records
        )


class TestNameAdmissionPatterns:
    """Excluded and accepted name patterns."""

    def test_excluded(self) -> None:
        result = _names(excluded_params=r"secret.*, .*\.internal").is_acceptable_name(
            "SecretKey"
        )
        assert result.reason is RejectionReason.NAME_EXCLUDED
        assert result.offending_pattern == "secret.*"

    def test_not_excluded(self) -> None:
        assert _names(excluded_params="secret.*").is_acceptable_name("username")

    def test_excluded_beats_accepted(self) -> None:
        result = _names(
            accepted_param_names=".*", excluded_params="secret"
        ).is_acceptable_name("secret")
        assert result.reason is RejectionReason.NAME_EXCLUDED

    def test_not_accepted(self) -> None:
        result = _names(accepted_param_names=r"user\..*").is_acceptable_name("admin")
        assert result.reason is RejectionReason.NAME_NOT_ACCEPTED
        assert result.offending_pattern == r"user\..*"

    def test_accepted(self) -> None:
        assert _names(accepted_param_names=r"user\..*").is_acceptable_name("user.name")

    def test_empty_allow_list_accepts_everything(self) -> None:
        assert _names(accepted_param_names="").is_acceptable_name("anything")

    def test_dev_mode_warns_with_pattern(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="paramgate"):
            _names(dev_mode=True, excluded_params="secret.*").is_acceptable_name("secretKey")
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "secret.*" in warnings[0].getMessage()

    def test_production_logs_debug_only(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="paramgate"):
            _names(excluded_params="secret.*").is_acceptable_name("secretKey")
        assert caplog.records
        assert all(r.levelno == logging.DEBUG for r in caplog.records)

    def test_log_message_is_single_line(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="paramgate"):
            _names(param_name_max_length=5).is_acceptable_name("x\nFORGED ENTRY")
        assert caplog.records
        assert all("\n" not in r.getMessage() for r in caplog.records)


class TestStandardNamePatterns:
    """Built-in name patterns."""

    @pytest.mark.parametrize(
        "name",
        [
            "user.name",
            "items[0].price",
            "map['key-1']",
            "list(2)",
            "order.lines[3].sku",
        ],
    )
    def test_legitimate_paths_accepted(self, name: str) -> None:
        assert _names(standard_patterns=True).is_acceptable_name(name)

    @pytest.mark.parametrize(
        "name",
        [
            "class.classLoader",
            "user.class.module",
            "session.user",
            "#session.user",
            "top.request.x",
            "_memberAccess.allowStaticMethodAccess",
            "method:execute",
        ],
    )
    def test_dangerous_names_excluded(self, name: str) -> None:
        result = _names(standard_patterns=True).is_acceptable_name(name)
        assert result.reason is RejectionReason.NAME_EXCLUDED

    @pytest.mark.parametrize("name", ["a b", "x;y", "${expr}", "@Runtime@exec"])
    def test_non_path_names_not_accepted(self, name: str) -> None:
        result = _names(standard_patterns=True).is_acceptable_name(name)
        assert result.reason is RejectionReason.NAME_NOT_ACCEPTED

    def test_classic_is_not_class_access(self) -> None:
        assert _names(standard_patterns=True).is_acceptable_name("classic")


class TestNameAdmissionTarget:
    """Target veto and annotation hook."""

    def test_target_veto(self, vetoing_target: VetoingTarget) -> None:
        names = _names()
        assert names.is_acceptable_name("ok", vetoing_target)
        result = names.is_acceptable_name("blocked", vetoing_target)
        assert result.reason is RejectionReason.NAME_VETOED

    def test_target_not_asked_after_pattern_rejection(
        self, vetoing_target: VetoingTarget
    ) -> None:
        _names(excluded_params="x").is_acceptable_name("x", vetoing_target)
        assert vetoing_target.name_checks == []

    def test_target_without_capability(self) -> None:
        assert _names().is_acceptable_name("blocked", InMemoryBindingTarget())

    def test_require_annotations_hook_passes(self) -> None:
        names = _names(require_annotations=True)
        assert names.is_parameter_annotated("anything", InMemoryBindingTarget())
        assert names.is_acceptable_name("anything", InMemoryBindingTarget())


# ===================================================================
# Test: ValueAdmission
# ===================================================================


class TestValueAdmission:
    """Tests for value admission."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values_always_accepted(self, value: str | None) -> None:
        values = _values(excluded_value_patterns=".*", accepted_value_patterns="x")
        assert values.is_acceptable_value("name", value)

    def test_no_patterns_accepts_everything(self) -> None:
        assert _values().is_acceptable_value("comment", "<script>alert(1)</script>")

    def test_excluded(self) -> None:
        result = _values(excluded_value_patterns=".*<script>.*").is_acceptable_value(
            "comment", "hi <SCRIPT>alert(1)"
        )
        assert result.reason is RejectionReason.VALUE_EXCLUDED
        assert result.offending_pattern == ".*<script>.*"

    def test_accepted(self) -> None:
        values = _values(accepted_value_patterns=r"\d+")
        assert values.is_acceptable_value("age", "42")
        result = values.is_acceptable_value("age", "forty")
        assert result.reason is RejectionReason.VALUE_NOT_ACCEPTED

    def test_excluded_beats_accepted(self) -> None:
        result = _values(
            accepted_value_patterns=".*", excluded_value_patterns="drop"
        ).is_acceptable_value("x", "drop")
        assert result.reason is RejectionReason.VALUE_EXCLUDED

    def test_target_veto(self, vetoing_target: VetoingTarget) -> None:
        values = _values()
        assert values.is_acceptable_value("x", "fine", vetoing_target)
        result = values.is_acceptable_value("x", "forbidden", vetoing_target)
        assert result.reason is RejectionReason.VALUE_VETOED

    def test_empty_value_skips_target_veto(self, vetoing_target: VetoingTarget) -> None:
        assert _values().is_acceptable_value("x", "", vetoing_target)
        assert vetoing_target.value_checks == []

    def test_dev_mode_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="paramgate"):
            _values(dev_mode=True, accepted_value_patterns="ok").is_acceptable_value("x", "no")
        assert any(r.levelno == logging.WARNING for r in caplog.records)


# ===================================================================
# Test: OrderingPolicy
# ===================================================================


class TestOrdering:
    """Tests for depth ordering."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("id", 0), ("items", 0), ("user.name", 1), ("items[0].price", 2), ("a.b[c].d", 3)],
    )
    def test_depth(self, name: str, expected: int) -> None:
        assert depth(name) == expected

    def test_shallow_first(self) -> None:
        assert sorted(["items[0].price", "items", "id"], key=depth_key) == [
            "id",
            "items",
            "items[0].price",
        ]

    def test_ties_break_lexically(self) -> None:
        assert sorted(["b.x", "a.y", "c"], key=depth_key) == ["c", "a.y", "b.x"]

    def test_deeper_never_before_shallower(self) -> None:
        names = ["z", "a.b.c", "a[0]", "m.n", "b", "a.b"]
        ordered = sorted(names, key=depth_key)
        depths = [depth(n) for n in ordered]
        assert depths == sorted(depths)

    def test_stable_and_idempotent(self) -> None:
        names = ["x.y", "a", "b[1]", "a.b.c"]
        once = sorted(names, key=depth_key)
        assert sorted(once, key=depth_key) == once
        assert sorted(reversed(names), key=depth_key) == once

    def test_depth_key(self) -> None:
        assert depth_key("a.b") == (1, "a.b")

    def test_policy_off_keeps_insertion_order(self) -> None:
        policy = OrderingPolicy()
        assert not policy.ordered
        assert policy.sort_key is None
        coll = ParameterCollection.from_pairs([("b.c", 1), ("a", 2)])
        assert policy.collection(coll.values()).names() == ["b.c", "a"]

    def test_policy_on(self) -> None:
        policy = OrderingPolicy(ordered=True)
        coll = ParameterCollection.from_pairs([("b.c", 1), ("a", 2)])
        assert policy.collection(coll.values()).names() == ["a", "b.c"]


# ===================================================================
# Test: AdmissionPipeline
# ===================================================================


class TestAdmissionPipeline:
    """Tests for the admission decision engine."""

    def test_filters_rejected_entries(self) -> None:
        pipeline = AdmissionPipeline.from_config(
            GateConfig(dmi_enabled=True, excluded_value_patterns=".*<script>.*")
        )
        params = ParameterCollection.from_mapping(
            {"user.name": "Alice", "method:delete": "1", "comment": "<script>"}
        )
        assert pipeline.filter(params).names() == ["user.name"]

    def test_evaluate_reports_rejections(self) -> None:
        pipeline = AdmissionPipeline.from_config(
            GateConfig(dmi_enabled=True, excluded_value_patterns=".*<script>.*")
        )
        params = ParameterCollection.from_mapping(
            {"method:delete": "1", "comment": "<script>", "ok": "1"}
        )
        outcome = pipeline.evaluate(params)
        assert outcome.admitted.names() == ["ok"]
        assert [(r.name, r.reason) for r in outcome.rejections] == [
            ("method:delete", RejectionReason.DMI_RESERVED),
            ("comment", RejectionReason.VALUE_EXCLUDED),
        ]
        assert outcome.rejections[1].value == "<script>"
        assert outcome.rejections[1].offending_pattern == ".*<script>.*"

    def test_insertion_order_by_default(self) -> None:
        pipeline = AdmissionPipeline.from_config(GateConfig())
        params = ParameterCollection.from_pairs([("z.a", 1), ("b", 2), ("a", 3)])
        admitted = pipeline.filter(params)
        assert admitted.names() == ["z.a", "b", "a"]
        assert not admitted.is_ordered

    def test_ordered_mode(self) -> None:
        pipeline = AdmissionPipeline.from_config(GateConfig(ordered=True))
        params = ParameterCollection.from_pairs(
            [("items[0].price", "1"), ("items", "x"), ("id", "7")]
        )
        admitted = pipeline.filter(params)
        assert admitted.names() == ["id", "items", "items[0].price"]
        assert admitted.is_ordered

    def test_deterministic(self) -> None:
        pipeline = AdmissionPipeline.from_config(
            GateConfig(ordered=True, excluded_params="x.*")
        )
        params = ParameterCollection.from_mapping(
            {"b.c": "1", "xa": "2", "a": ["3", "4"], "d[0]": None}
        )
        first = pipeline.filter(params)
        second = pipeline.filter(params)
        assert first.as_pairs() == second.as_pairs()
        assert first.names() == ["a", "b.c", "d[0]"]

    def test_does_not_bind(self, vetoing_target: VetoingTarget) -> None:
        pipeline = AdmissionPipeline.from_config(GateConfig())
        params = ParameterCollection.from_mapping({"a": "1"})
        # VetoingTarget.try_set raises AssertionError if called
        assert pipeline.filter(params, vetoing_target).names() == ["a"]

    def test_input_untouched(self) -> None:
        pipeline = AdmissionPipeline.from_config(GateConfig(excluded_params="a"))
        params = ParameterCollection.from_mapping({"a": "1", "b": "2"})
        pipeline.filter(params)
        assert params.names() == ["a", "b"]

    def test_value_not_checked_after_name_rejection(
        self, vetoing_target: VetoingTarget
    ) -> None:
        pipeline = AdmissionPipeline.from_config(GateConfig())
        params = ParameterCollection.from_mapping({"blocked": "v1", "fine": "v2"})
        pipeline.filter(params, vetoing_target)
        assert vetoing_target.value_checks == ["v2"]

    def test_multi_valued_checks_primary_value(self) -> None:
        pipeline = AdmissionPipeline.from_config(
            GateConfig(excluded_value_patterns=".*<script>.*")
        )
        params = ParameterCollection([Parameter("tags", ["ok", "<script>"])])
        admitted = pipeline.filter(params)
        assert admitted["tags"].raw == ["ok", "<script>"]

    def test_uses_pinned_policy(self) -> None:
        pipeline = AdmissionPipeline.from_config(GateConfig())
        strict = AdmissionPolicy.from_config(GateConfig(excluded_params="a"))
        params = ParameterCollection.from_mapping({"a": "1"})
        assert pipeline.evaluate(params, policy=strict).admitted.names() == []
        assert pipeline.filter(params).names() == ["a"]

    def test_dev_mode_same_decisions(self) -> None:
        common = dict(
            dmi_enabled=True,
            param_name_max_length=10,
            excluded_params="secret.*",
            accepted_value_patterns=r"\w*",
        )
        params = ParameterCollection.from_mapping(
            {
                "action:go": "1",
                "a" * 11: "x",
                "secretKey": "x",
                "note": "has space",
                "good": "value",
            }
        )
        prod = AdmissionPipeline.from_config(GateConfig(**common)).evaluate(params)
        dev = AdmissionPipeline.from_config(GateConfig(dev_mode=True, **common)).evaluate(
            params
        )
        assert prod == dev
        assert prod.admitted.names() == ["good"]
