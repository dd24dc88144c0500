"""Minecraft title texture generator."""
