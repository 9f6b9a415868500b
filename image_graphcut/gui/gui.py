import sys

import pygame

from image_graphcut.errors import SegmentationError
from image_graphcut.utils import BACKGROUND_RGBA, FOREGROUND_RGBA, find_scribbles, mask_to_rgb


DRAW_RADIUS = 3


class Gui:
	def __init__(self, engine):
		self.engine = engine

		self.source_image = None
		self.scribbles = None
		self.results = None
		self.image_size = None

		self.resized_image = None
		self.resized_scribbles = None
		self.resized_results = None

		self.screen = None
		self.screen_size = None
		self.font = None

		self.image_position = (0, 0)
		self.image_zoom = 1

		self.prev_draw_pos = (0, 0)
		self.message = ""


	def update_screen(self, size_changed, draw_changed):
		im_w, im_h = self.image_size
		sc_w, sc_h = self.screen_size

		w_ratio = im_w / sc_w
		h_ratio = im_h / sc_h
		self.image_zoom = max(w_ratio, h_ratio)

		new_w = int(im_w / self.image_zoom)
		new_h = int(im_h / self.image_zoom)

		self.image_position = ((sc_w - new_w) // 2, (sc_h - new_h) // 2)

		if size_changed:
			self.resized_image = pygame.transform.scale(self.source_image, (new_w, new_h))
			self.resized_results = pygame.transform.scale(self.results, (new_w, new_h))

		if size_changed or draw_changed:
			self.resized_scribbles = pygame.transform.scale(self.scribbles, (new_w, new_h))
			self.screen.fill((0, 0, 0))
			self.screen.blit(self.resized_image, self.image_position)
			self.screen.blit(self.resized_results, self.image_position)
			self.screen.blit(self.resized_scribbles, self.image_position)

			params = "Lambda: {:g}  Bins: {}".format(self.engine.terminal_lambda, self.engine.histogram_bins)
			self.screen.blit(self.font.render(params, True, (255, 255, 255)), (10, 10))
			if self.message:
				self.screen.blit(self.font.render(self.message, True, (255, 255, 0)), (10, 35))


	def reset(self):
		self.scribbles = pygame.Surface(self.image_size, pygame.SRCALPHA)
		self.scribbles.fill((0, 0, 0, 0))
		self.results = pygame.Surface(self.image_size, pygame.SRCALPHA)
		self.results.fill((0, 0, 0, 0))
		self.message = ""


	def segment(self):
		# Surface arrays are indexed (x, y), seeds use the same indexing
		np_image = pygame.surfarray.array3d(self.source_image)
		sources, sinks = find_scribbles(pygame.surfarray.array3d(self.scribbles))
		self.engine.set_seeds(sources, sinks)

		try:
			mask = self.engine.run(np_image)
		except SegmentationError as e:
			self.message = str(e)
			return

		self.message = ""
		rgb_results = pygame.surfarray.pixels3d(self.results)
		alpha_results = pygame.surfarray.pixels_alpha(self.results)
		rgb_results[:, :, :] = mask_to_rgb(mask)
		alpha_results[:, :] = 128
		del rgb_results
		del alpha_results


	def change_bins(self, delta):
		bins = max(1, self.engine.histogram_bins + delta)
		self.engine.configure(self.engine.terminal_lambda, bins)


	def start(self, image_path):
		# --- INITIALIZING PYGAME ---
		pygame.init()
		screen_info = pygame.display.Info()
		self.screen_size = (screen_info.current_w // 2, screen_info.current_h // 2)

		self.screen = pygame.display.set_mode(self.screen_size, pygame.RESIZABLE)
		pygame.display.set_caption("image-graphcut")
		clock = pygame.time.Clock()
		self.font = pygame.font.SysFont('consolas', 20, True)

		# --- LOADING ASSETS ---
		self.source_image = pygame.image.load(image_path).convert()
		self.image_size = (self.source_image.get_width(), self.source_image.get_height())
		self.reset()

		size_changed = True

		# --- MAIN LOOP ---
		while 1:
			draw_changed = False

			# --- EVENTS ---
			for event in pygame.event.get():
				if event.type == pygame.QUIT:
					pygame.quit()
					sys.exit()
				if event.type == pygame.KEYDOWN:
					if event.key in [pygame.K_KP_ENTER, pygame.K_RETURN]:
						self.segment()
						size_changed = True
					if event.key == pygame.K_r:
						self.reset()
						size_changed = True
					if event.key in [pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS]:
						self.change_bins(1)
						draw_changed = True
					if event.key in [pygame.K_MINUS, pygame.K_KP_MINUS]:
						self.change_bins(-1)
						draw_changed = True

				if event.type == pygame.VIDEORESIZE:
					self.screen_size = (event.w, event.h)
					self.screen = pygame.display.set_mode(self.screen_size, pygame.RESIZABLE)
					size_changed = True


			# --- DRAWING ---
			cursor_x, cursor_y = pygame.mouse.get_pos()
			cursor_x = int((cursor_x - self.image_position[0]) * self.image_zoom)
			cursor_y = int((cursor_y - self.image_position[1]) * self.image_zoom)

			draw_mode = 0
			if pygame.mouse.get_pressed()[0]:
				draw_mode = 1
			elif pygame.mouse.get_pressed()[2]:
				draw_mode = 2

			if draw_mode > 0:
				draw_changed = True
				color = FOREGROUND_RGBA if draw_mode == 1 else BACKGROUND_RGBA

				pygame.draw.line(self.scribbles, color, self.prev_draw_pos, (cursor_x, cursor_y), DRAW_RADIUS * 2)
				pygame.draw.circle(self.scribbles, color, (cursor_x, cursor_y), DRAW_RADIUS - 1)

			self.prev_draw_pos = (cursor_x, cursor_y)


			# --- UPDATING SCREEN ---
			self.update_screen(size_changed, draw_changed)
			size_changed = False
			pygame.display.flip()
			clock.tick(120)
