"""
GymTastic Checkout — Checkout Orchestrator
============================================
Turns a cart snapshot into a committed purchase, all-or-nothing.

State machine:
    VALIDATING → RESERVING_STOCK → ACTIVATING_MEMBERSHIP
               → RECORDING_ORDER → COMMITTED
    any failure → ABORTED (after compensation)

Rules:
- Exactly one CheckoutOutcome per call; domain refusals and storage
  failures never raise
- Renewal eligibility is decided before any stock is touched
- Every merch line is attempted so every short product is reported,
  then every decrement made by this attempt is re-credited
- One checkout in flight per user
- Cancellation and timeout are checked between stages
- Events are emitted only after the order is recorded
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from core.config import ConfigStore, InMemoryConfigStore
from core.errors import PersistenceError, ReasonCode, RejectionReason
from core.events import DomainEvent, SubscriberRegistry, dispatch
from core.time import Clock, Deadline, SystemClock, add_days
from engines.cart.lines import CartLine, CartSnapshot
from engines.catalog.domain import Site
from engines.checkout.events import (
    CHECKOUT_MEMBERSHIP_ACTIVATED_V1,
    CHECKOUT_ORDER_COMMITTED_V1,
    SOURCE_ENGINE,
    build_membership_activated_payload,
    build_order_committed_payload,
)
from engines.checkout.outcomes import CheckoutOutcome, CheckoutStage, CheckoutStatus
from engines.checkout.policies import (
    empty_cart_policy,
    known_products_policy,
    normalize_user_id,
    payment_method_policy,
    site_required_policy,
    user_id_policy,
)
from engines.membership.policy import MembershipPolicy
from engines.membership.state import MembershipState
from engines.orders.records import Order, OrderLine

logger = logging.getLogger("gymtastic.checkout")


class _Abort(Exception):
    """Internal signal: stop the pipeline with these reasons."""

    def __init__(self, *reasons: RejectionReason):
        self.reasons = reasons
        super().__init__(reasons[0].message)


def persistence_failure(exc: PersistenceError, *, step: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.PERSISTENCE_FAILURE,
        message=f"Could not complete checkout while {step}: {exc}",
        policy_name=step,
    )


class _Attempt:
    """Mutable bookkeeping for one checkout call."""

    def __init__(self, user_id: str, now) -> None:
        self.user_id = user_id
        self.now = now
        self.stages: List[CheckoutStage] = []
        self.decremented: List[Tuple[int, int]] = []
        self.previous_state: Optional[MembershipState] = None
        self.membership_saved = False
        self.activated_state: Optional[MembershipState] = None

    def enter(self, stage: CheckoutStage) -> None:
        self.stages.append(stage)
        logger.debug(f"Checkout {self.user_id}: {stage.value}")


class CheckoutService:
    """
    Checkout orchestrator.

    Collaborators:
        stock:       StockLedger (shared across users)
        memberships: MembershipStore
        orders:      OrderLog (append-only)
        catalog:     ProductCatalog for names, kinds and plan durations
        sites:       SiteDirectory, used to resolve a site given by id
        config:      ConfigStore for renewal window, timeout, default duration
        clock:       Clock; "now" is read once per checkout
        events:      SubscriberRegistry receiving post-commit events
    """

    def __init__(
        self,
        *,
        stock,
        memberships,
        orders,
        catalog=None,
        sites=None,
        config: Optional[ConfigStore] = None,
        clock: Optional[Clock] = None,
        events: Optional[SubscriberRegistry] = None,
    ) -> None:
        self._stock = stock
        self._memberships = memberships
        self._orders = orders
        self._catalog = catalog
        self._sites = sites
        self._config = config or InMemoryConfigStore()
        self._clock = clock or SystemClock()
        self._events = events
        self._user_locks: Dict[str, threading.Lock] = {}
        self._user_locks_guard = threading.Lock()

    # ══════════════════════════════════════════════════════════
    # PUBLIC API
    # ══════════════════════════════════════════════════════════

    def checkout(
        self,
        user_id: str,
        cart_snapshot: CartSnapshot,
        selected_site=None,
        *,
        cart=None,
        payment_method: str = "DEBIT",
        cancel_event: Optional[threading.Event] = None,
    ) -> CheckoutOutcome:
        user_id = normalize_user_id(user_id)
        attempt = _Attempt(user_id, self._clock.now_utc())
        attempt.enter(CheckoutStage.VALIDATING)

        rejection = user_id_policy(user_id) or empty_cart_policy(cart_snapshot)
        if rejection is not None:
            return self._aborted(attempt, (rejection,))

        lock = self._lock_for(user_id)
        if not lock.acquire(blocking=False):
            return self._aborted(attempt, (RejectionReason(
                code=ReasonCode.CHECKOUT_IN_PROGRESS,
                message="Another checkout for this user is still running.",
                policy_name="single_checkout_per_user",
            ),))
        try:
            return self._run(
                attempt,
                cart_snapshot,
                selected_site,
                cart=cart,
                payment_method=payment_method,
                cancel_event=cancel_event,
            )
        finally:
            lock.release()

    def order_history(self, user_id: str) -> List[Order]:
        """Orders for `user_id`, newest first."""
        return self._orders.list_for_user(normalize_user_id(user_id))

    # ══════════════════════════════════════════════════════════
    # PIPELINE
    # ══════════════════════════════════════════════════════════

    def _run(
        self,
        attempt: _Attempt,
        snapshot: CartSnapshot,
        selected_site,
        *,
        cart,
        payment_method: str,
        cancel_event: Optional[threading.Event],
    ) -> CheckoutOutcome:
        checkout_rules = self._config.get_checkout_rules()
        membership_rules = self._config.get_membership_rules()
        policy = MembershipPolicy.from_rules(membership_rules)
        deadline = Deadline(attempt.now, checkout_rules.timeout_seconds)
        plan_lines = snapshot.plan_lines
        merch_lines = snapshot.merch_lines

        try:
            # ── VALIDATING ────────────────────────────────────
            rejection = payment_method_policy(payment_method)
            if rejection is not None:
                raise _Abort(rejection)

            try:
                missing = known_products_policy(snapshot, self._catalog)
            except PersistenceError as exc:
                raise _Abort(persistence_failure(exc, step="catalog_lookup"))
            if missing:
                raise _Abort(*missing)

            try:
                site = self._resolve_site(selected_site)
            except PersistenceError as exc:
                raise _Abort(persistence_failure(exc, step="site_lookup"))
            if plan_lines:
                try:
                    attempt.previous_state = self._memberships.get(attempt.user_id)
                except PersistenceError as exc:
                    raise _Abort(persistence_failure(exc, step="membership_lookup"))
                rejection = policy.renewal_rejection(attempt.previous_state, attempt.now)
                if rejection is not None:
                    raise _Abort(rejection)

            rejection = site_required_policy(snapshot, site)
            if rejection is not None:
                raise _Abort(rejection)

            self._check_interruption(cancel_event, deadline)

            # ── RESERVING_STOCK ───────────────────────────────
            if merch_lines:
                attempt.enter(CheckoutStage.RESERVING_STOCK)
                self._reserve_stock(attempt, merch_lines)
                self._check_interruption(cancel_event, deadline)

            # ── ACTIVATING_MEMBERSHIP ─────────────────────────
            if plan_lines:
                attempt.enter(CheckoutStage.ACTIVATING_MEMBERSHIP)
                self._activate_membership(
                    attempt, plan_lines, site, policy,
                    membership_rules.default_plan_duration_days,
                )
                self._check_interruption(cancel_event, deadline)

            # ── RECORDING_ORDER ───────────────────────────────
            attempt.enter(CheckoutStage.RECORDING_ORDER)
            order = self._build_order(
                attempt, snapshot, site if plan_lines else None, payment_method,
            )
            try:
                self._orders.append(order)
            except PersistenceError as exc:
                raise _Abort(persistence_failure(exc, step="order_append"))

        except _Abort as abort:
            return self._compensate(attempt, abort.reasons)
        except Exception as exc:
            logger.error(
                f"Unexpected failure during checkout for {attempt.user_id} "
                f"at {attempt.stages[-1].value}",
                exc_info=True,
            )
            return self._compensate(attempt, (RejectionReason(
                code=ReasonCode.PERSISTENCE_FAILURE,
                message=f"Checkout failed unexpectedly: {type(exc).__name__}: {exc}",
                policy_name="checkout_unexpected_failure",
            ),))

        # ── COMMITTED ─────────────────────────────────────────
        attempt.enter(CheckoutStage.COMMITTED)
        self._clear_cart(cart, attempt.user_id)
        logger.info(
            f"Checkout committed: order {order.order_id} for {attempt.user_id} "
            f"(total {order.total_amount}, {order.item_count} item(s), "
            f"membership_activated={order.membership_activated})"
        )
        self._emit_events(attempt, order)

        return CheckoutOutcome(
            status=CheckoutStatus.COMMITTED,
            order=order,
            membership_activated=order.membership_activated,
            stages=tuple(attempt.stages),
        )

    # ══════════════════════════════════════════════════════════
    # STAGES
    # ══════════════════════════════════════════════════════════

    def _reserve_stock(self, attempt: _Attempt, merch_lines: Sequence[CartLine]) -> None:
        failures: List[RejectionReason] = []
        for line in merch_lines:
            try:
                result = self._stock.try_decrement(line.product_id, line.quantity)
            except PersistenceError as exc:
                raise _Abort(persistence_failure(exc, step="stock_decrement"))
            if result.success:
                attempt.decremented.append((line.product_id, line.quantity))
            else:
                failures.append(result.rejection)
        if failures:
            raise _Abort(*failures)

    def _activate_membership(
        self,
        attempt: _Attempt,
        plan_lines: Sequence[CartLine],
        site: Site,
        policy: MembershipPolicy,
        default_duration_days: int,
    ) -> None:
        durations = []
        for line in plan_lines:
            days = None
            if self._catalog is not None:
                try:
                    days = self._catalog.plan_duration(line.product_id)
                except PersistenceError as exc:
                    raise _Abort(persistence_failure(exc, step="catalog_lookup"))
            durations.append((days or default_duration_days) * line.quantity)
        plan_end = add_days(attempt.now, max(durations))

        new_state = policy.activate(
            attempt.previous_state,
            plan_end=plan_end,
            site_id=site.site_id,
            site_name=site.name,
            site_lat=site.lat,
            site_lng=site.lng,
        )
        try:
            self._memberships.save(new_state)
        except PersistenceError as exc:
            raise _Abort(persistence_failure(exc, step="membership_save"))
        attempt.membership_saved = True
        attempt.activated_state = new_state

    def _build_order(
        self,
        attempt: _Attempt,
        snapshot: CartSnapshot,
        site: Optional[Site],
        payment_method: str,
    ) -> Order:
        names = {}
        if self._catalog is not None:
            try:
                names = self._catalog.names_by_id(snapshot.product_ids())
            except PersistenceError as exc:
                raise _Abort(persistence_failure(exc, step="catalog_lookup"))
        lines = tuple(
            OrderLine(
                product_id=line.product_id,
                name=names.get(line.product_id) or f"Product #{line.product_id}",
                kind=line.kind,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in snapshot
        )
        return Order(
            user_id=attempt.user_id,
            created_at=attempt.now,
            total_amount=snapshot.total,
            item_summary=", ".join(f"{ol.name} ×{ol.quantity}" for ol in lines),
            item_count=snapshot.item_count,
            lines=lines,
            membership_activated=attempt.membership_saved,
            site_id=site.site_id if site else None,
            payment_method=payment_method.strip().upper(),
        )

    # ══════════════════════════════════════════════════════════
    # COMPENSATION
    # ══════════════════════════════════════════════════════════

    def _compensate(
        self, attempt: _Attempt, reasons: Tuple[RejectionReason, ...],
    ) -> CheckoutOutcome:
        compensation_failures: List[RejectionReason] = []

        if attempt.membership_saved:
            try:
                self._memberships.save(attempt.previous_state)
            except PersistenceError:
                logger.error(
                    f"Membership rollback failed for {attempt.user_id}",
                    exc_info=True,
                )
                compensation_failures.append(RejectionReason(
                    code=ReasonCode.PERSISTENCE_FAILURE,
                    message=(
                        f"Membership for {attempt.user_id} could not be restored "
                        f"after an aborted checkout."
                    ),
                    policy_name="membership_compensation",
                ))

        stranded: List[int] = []
        for product_id, quantity in reversed(attempt.decremented):
            try:
                self._stock.restock(product_id, quantity)
            except (PersistenceError, ValueError):
                logger.error(
                    f"Stock re-credit failed: product {product_id} x{quantity} "
                    f"for {attempt.user_id}",
                    exc_info=True,
                )
                stranded.append(product_id)

        if stranded:
            compensation_failures.append(RejectionReason(
                code=ReasonCode.PERSISTENCE_FAILURE,
                message=(
                    "Stock could not be re-credited for product(s) "
                    f"{', '.join(str(pid) for pid in sorted(stranded))}."
                ),
                policy_name="stock_compensation",
                product_id=stranded[0] if len(stranded) == 1 else None,
            ))

        if compensation_failures:
            return self._aborted(
                attempt,
                tuple(compensation_failures),
                rollback_complete=False,
                caused_by=reasons[0],
            )
        return self._aborted(attempt, reasons)

    def _aborted(
        self,
        attempt: _Attempt,
        reasons: Tuple[RejectionReason, ...],
        *,
        rollback_complete: bool = True,
        caused_by: Optional[RejectionReason] = None,
    ) -> CheckoutOutcome:
        attempt.enter(CheckoutStage.ABORTED)
        logger.info(
            f"Checkout aborted for {attempt.user_id or '<anonymous>'}: "
            f"{', '.join(r.code for r in reasons)}"
        )
        return CheckoutOutcome(
            status=CheckoutStatus.ABORTED,
            reasons=reasons,
            stages=tuple(attempt.stages),
            rollback_complete=rollback_complete,
            caused_by=caused_by,
        )

    # ══════════════════════════════════════════════════════════
    # HELPERS
    # ══════════════════════════════════════════════════════════

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._user_locks_guard:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._user_locks[user_id] = lock
            return lock

    def _resolve_site(self, selected_site) -> Optional[Site]:
        """None when the site cannot be resolved; plans then abort with SITE_REQUIRED."""
        if selected_site is None or isinstance(selected_site, Site):
            return selected_site
        if self._sites is None:
            logger.warning(f"Site {selected_site!r} given by id but no site directory is wired")
            return None
        try:
            site_id = int(selected_site)
        except (TypeError, ValueError):
            return None
        return self._sites.get(site_id)

    def _check_interruption(
        self, cancel_event: Optional[threading.Event], deadline: Deadline,
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise _Abort(RejectionReason(
                code=ReasonCode.CHECKOUT_CANCELLED,
                message="Checkout was cancelled.",
                policy_name="checkout_cancellation",
            ))
        if deadline.expired(self._clock.now_utc()):
            raise _Abort(RejectionReason(
                code=ReasonCode.CHECKOUT_TIMEOUT,
                message=(
                    f"Checkout exceeded {deadline.timeout_seconds:g} second(s)."
                ),
                policy_name="checkout_timeout",
            ))

    def _clear_cart(self, cart, user_id: str) -> None:
        if cart is None:
            return
        try:
            cart.clear()
        except PersistenceError:
            # The order is committed; a stale stored cart is recoverable.
            logger.error(f"Cart clear failed after checkout for {user_id}", exc_info=True)

    def _emit_events(self, attempt: _Attempt, order: Order) -> None:
        if self._events is None:
            return
        dispatch(
            DomainEvent(
                event_type=CHECKOUT_ORDER_COMMITTED_V1,
                source_engine=SOURCE_ENGINE,
                occurred_at=attempt.now,
                payload=build_order_committed_payload(order),
            ),
            self._events,
        )
        if attempt.activated_state is not None:
            dispatch(
                DomainEvent(
                    event_type=CHECKOUT_MEMBERSHIP_ACTIVATED_V1,
                    source_engine=SOURCE_ENGINE,
                    occurred_at=attempt.now,
                    payload=build_membership_activated_payload(
                        attempt.activated_state, order.order_id, attempt.now,
                    ),
                ),
                self._events,
            )
