"""
Purchase creator module.

Handles creation of PENDING purchases with price snapshots.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import PurchaseStatus
from app.models.purchase import Purchase
from app.models.vip_package import VipPackage
from app.repositories.purchase_repository import PurchaseRepository
from app.repositories.user_repository import UserRepository
from app.repositories.vip_package_repository import VipPackageRepository
from app.services.base_service import BaseService, transaction
from app.utils.exceptions import NotFoundError, PackageDisabledError


class PurchaseCreator(BaseService):
    """Creates purchase requests for admin review."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize purchase creator."""
        super().__init__(session)
        self.purchase_repo = PurchaseRepository(session)
        self.package_repo = VipPackageRepository(session)
        self.user_repo = UserRepository(session)

    @transaction
    async def create_purchase(
        self,
        user_id: int,
        package_level: int,
        receipt_url: str | None = None,
    ) -> Purchase:
        """
        Create a PENDING purchase.

        Investment and daily profit are copied from the package so later
        catalog edits never change what was bought.

        Args:
            user_id: Buyer
            package_level: VIP level being bought
            receipt_url: Uploaded payment receipt

        Returns:
            Created purchase

        Raises:
            NotFoundError: Unknown user or package level
            PackageDisabledError: Package is not on sale
        """
        if not await self.user_repo.exists(id=user_id):
            raise NotFoundError("User", user_id)

        package = await self.package_repo.get_by_level(package_level)
        if not package:
            raise NotFoundError("VipPackage", package_level)
        if not package.is_enabled:
            raise PackageDisabledError(package_level)

        purchase = await self.purchase_repo.create(
            user_id=user_id,
            vip_package_id=package.id,
            investment_bs=package.investment_bs,
            daily_profit_bs=package.daily_profit_bs,
            status=PurchaseStatus.PENDING.value,
            receipt_url=receipt_url,
        )

        self.logger.info(
            "Purchase created",
            extra={
                "purchase_id": purchase.id,
                "user_id": user_id,
                "package_level": package_level,
                "investment_bs": str(package.investment_bs),
            },
        )

        return purchase

    async def list_packages(self) -> list[VipPackage]:
        """VIP packages currently on sale, by level."""
        return await self.package_repo.list_enabled()
