from fastapi import APIRouter, Depends, HTTPException, status

from payment_gateway.dependencies import get_health_aggregator, get_payment_gateway
from payment_gateway.errors import ErrorKind
from payment_gateway.health import HealthAggregator
from payment_gateway.schemas import HealthStatus, PaymentRequest, PaymentResponse
from payment_gateway.service import PaymentGateway

router = APIRouter()

ERROR_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PROTOCOL: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.NETWORK: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post("/", response_model=PaymentResponse)
def pay(request: PaymentRequest, gateway: PaymentGateway = Depends(get_payment_gateway)):
    result = gateway.pay(request)
    if not result.ok:
        raise HTTPException(status_code=ERROR_STATUS[result.error.kind], detail=result.error.message)
    return result.response


@router.get("/health", response_model=HealthStatus)
def health(aggregator: HealthAggregator = Depends(get_health_aggregator)):
    return aggregator.health()
