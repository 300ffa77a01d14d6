# rental_refunds/core/errors.py
# 호출자 검증 레이어에서 쓰는 에러 타입 (엔진 자체는 raise 하지 않음)


class CancellationInputError(ValueError):
    pass


class NegativeAmountError(CancellationInputError):
    def __init__(self, field: str, value):
        super().__init__(f"{field} must be >= 0, got={value}")
        self.field = field
        self.value = value


class NonFiniteAmountError(CancellationInputError):
    def __init__(self, field: str, value):
        super().__init__(f"{field} must be a finite number, got={value}")
        self.field = field
        self.value = value


class PaymentSplitMismatchError(CancellationInputError):
    def __init__(self, trip_cost, sources_total):
        super().__init__(
            f"credits + bonus + charge must equal trip_cost: trip_cost={trip_cost} sources={sources_total}"
        )
        self.trip_cost = trip_cost
        self.sources_total = sources_total


class DepositSplitMismatchError(CancellationInputError):
    def __init__(self, deposit_amount, sources_total):
        super().__init__(
            "deposit_from_wallet + deposit_from_card must equal deposit_amount: "
            f"deposit_amount={deposit_amount} sources={sources_total}"
        )
        self.deposit_amount = deposit_amount
        self.sources_total = sources_total
