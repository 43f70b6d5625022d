from ops_control_center.activity.recent import RecentActivityResolver, format_customer_name

__all__ = ["RecentActivityResolver", "format_customer_name"]
