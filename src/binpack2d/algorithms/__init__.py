"""Ordering rules and the packer."""
